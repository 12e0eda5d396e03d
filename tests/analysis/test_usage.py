"""Tests for package usage rows."""

from conflict_analyzer.analysis.usage import build_usage_rows
from conflict_analyzer.models.package import PackageReference, ProjectInfo
from conflict_analyzer.resolvers.memory import InMemoryMetadataSource
from conflict_analyzer.resolvers.transitive import TransitiveResolver


class TestBuildUsageRows:
    """Tests for build_usage_rows."""

    def test_direct_usage_lists_project_names(self) -> None:
        """Test that a directly used package lists each project once."""
        projects = [
            ProjectInfo(
                project_path="/src/Api/Api.csproj",
                package_references=[PackageReference(name="Serilog", version="3.1.1")],
            ),
            ProjectInfo(
                project_path="/src/Worker/Worker.csproj",
                package_references=[PackageReference(name="Serilog", version="3.1.1")],
            ),
        ]

        rows = build_usage_rows(projects)

        assert len(rows) == 1
        assert rows[0].name == "Serilog"
        assert rows[0].version == "3.1.1"
        assert rows[0].paths == ["Api", "Worker"]

    def test_transitive_paths_follow_direct_users(self) -> None:
        """Test ordering of direct and transitive paths within a row."""
        resolver = TransitiveResolver(
            InMemoryMetadataSource({
                ("Alpha", "1.0"): [("Beta", "2.0")],
                ("Beta", "2.0"): [],
            })
        )
        projects = [
            resolver.enrich_project(
                ProjectInfo(
                    project_path="/src/X/X.csproj",
                    package_references=[PackageReference(name="Alpha", version="1.0")],
                )
            ),
            ProjectInfo(
                project_path="/src/Z/Z.csproj",
                package_references=[PackageReference(name="Beta", version="2.0")],
            ),
        ]

        rows = build_usage_rows(projects)
        beta = next(row for row in rows if row.name == "Beta")

        assert beta.paths == ["Z", "X -> Alpha 1.0 -> Beta 2.0"]

    def test_all_paths_of_one_project_are_kept(self) -> None:
        """Test that a package reached twice in a project shows both paths."""
        resolver = TransitiveResolver(
            InMemoryMetadataSource({
                ("A", "1"): [("D", "1")],
                ("B", "1"): [("D", "1")],
                ("D", "1"): [],
            })
        )
        project = resolver.enrich_project(
            ProjectInfo(
                project_path="/src/X/X.csproj",
                package_references=[
                    PackageReference(name="A", version="1"),
                    PackageReference(name="B", version="1"),
                ],
            )
        )

        rows = build_usage_rows([project])
        d_row = next(row for row in rows if row.name == "D")

        assert d_row.paths == ["X -> A 1 -> D 1", "X -> B 1 -> D 1"]

    def test_unenriched_transitive_reference_uses_origin_path(self) -> None:
        """Test the fallback when no path labels were recorded."""
        project = ProjectInfo(
            project_path="/src/X/X.csproj",
            package_references=[
                PackageReference(
                    name="D", version="1", is_transitive=True, origin_path="A 1 -> D 1"
                ),
            ],
        )

        rows = build_usage_rows([project])

        assert rows[0].paths == ["X -> A 1 -> D 1"]

    def test_rows_sorted_by_name_and_version(self) -> None:
        """Test that rows are ordered by "name:version"."""
        project = ProjectInfo(
            project_path="/src/X/X.csproj",
            package_references=[
                PackageReference(name="Zeta", version="1.0"),
                PackageReference(name="Alpha", version="2.0"),
                PackageReference(name="Alpha", version="1.0"),
            ],
        )

        rows = build_usage_rows([project])

        assert [(r.name, r.version) for r in rows] == [
            ("Alpha", "1.0"),
            ("Alpha", "2.0"),
            ("Zeta", "1.0"),
        ]

    def test_no_projects(self) -> None:
        """Test that an empty solution has no rows."""
        assert build_usage_rows([]) == []
