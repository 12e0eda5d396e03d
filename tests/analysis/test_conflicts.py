"""Tests for package version conflict detection."""
import pytest
from pydantic import ValidationError

from conflict_analyzer.analysis.conflicts import (
    aggregate_conflicts,
    aggregate_transitive_conflicts,
    build_conflicts,
)
from conflict_analyzer.models.conflict import ConflictRecord, ConflictVersion
from conflict_analyzer.models.package import (
    DirectPackageInfo,
    PackageReference,
    ProjectInfo,
    ProjectTransitiveInfo,
    TransitivePackageInfo,
)
from conflict_analyzer.resolvers.memory import InMemoryMetadataSource
from conflict_analyzer.resolvers.transitive import TransitiveResolver


def make_project(path: str, packages: list[tuple[str, str]]) -> ProjectInfo:
    """Create a project with direct references."""
    return ProjectInfo(
        project_path=path,
        package_references=[PackageReference(name=n, version=v) for n, v in packages],
    )


class TestBuildConflicts:
    """Tests for build_conflicts."""

    def test_single_version_is_not_a_conflict(self) -> None:
        """Test that a package used at one version never appears."""
        usage = {"Serilog": {"2.12.0": {"Api", "Worker"}}}

        assert build_conflicts(usage) == []

    def test_two_versions_conflict(self) -> None:
        """Test that two distinct versions produce a record."""
        usage = {"Serilog": {"2.12.0": {"Api"}, "3.1.1": {"Worker"}}}

        conflicts = build_conflicts(usage)

        assert len(conflicts) == 1
        assert conflicts[0].package_name == "Serilog"
        assert conflicts[0].get_version_strings() == ["2.12.0", "3.1.1"]
        assert conflicts[0].version_count == 2

    def test_versions_sorted_numerically(self) -> None:
        """Test that 10.0 sorts after 9.0."""
        usage = {"Pkg": {"10.0.0": {"A"}, "9.0.0": {"B"}, "9.0.1": {"C"}}}

        conflicts = build_conflicts(usage)

        assert conflicts[0].get_version_strings() == ["9.0.0", "9.0.1", "10.0.0"]

    def test_unparseable_versions_sort_last(self) -> None:
        """Test that range leftovers follow real versions."""
        usage = {"Pkg": {"2.0.0,3.0.0": {"A"}, "2.5.0": {"B"}}}

        conflicts = build_conflicts(usage)

        assert conflicts[0].get_version_strings() == ["2.5.0", "2.0.0,3.0.0"]

    def test_sources_sorted(self) -> None:
        """Test that labels are sorted alphabetically."""
        usage = {"Pkg": {"1.0": {"Zeta", "Alpha", "Mid"}, "2.0": {"Beta"}}}

        conflicts = build_conflicts(usage)

        assert conflicts[0].versions[0].sources == ["Alpha", "Mid", "Zeta"]

    def test_packages_sorted_case_insensitively(self) -> None:
        """Test that records are ordered by package name ignoring case."""
        usage = {
            "zlib": {"1": {"A"}, "2": {"B"}},
            "Alpha": {"1": {"A"}, "2": {"B"}},
            "beta": {"1": {"A"}, "2": {"B"}},
        }

        names = [c.package_name for c in build_conflicts(usage)]

        assert names == ["Alpha", "beta", "zlib"]

    def test_empty_usage(self) -> None:
        """Test that no usage means no conflicts."""
        assert build_conflicts({}) == []


class TestAggregateConflicts:
    """Tests for aggregate_conflicts."""

    def test_direct_references_labelled_by_project(self) -> None:
        """Test that direct usages use the project name as label."""
        projects = [
            make_project("/src/Api/Api.csproj", [("Serilog", "2.12.0")]),
            make_project("/src/Worker/Worker.csproj", [("Serilog", "3.1.1")]),
        ]

        conflicts = aggregate_conflicts(projects)

        assert [(v.version, v.sources) for v in conflicts[0].versions] == [
            ("2.12.0", ["Api"]),
            ("3.1.1", ["Worker"]),
        ]

    def test_same_version_everywhere_is_clean(self) -> None:
        """Test that agreement across projects yields no conflict."""
        projects = [
            make_project("/src/Api/Api.csproj", [("Serilog", "3.1.1")]),
            make_project("/src/Worker/Worker.csproj", [("Serilog", "3.1.1")]),
        ]

        assert aggregate_conflicts(projects) == []

    def test_windows_style_project_paths(self) -> None:
        """Test that project names come from Windows paths too."""
        projects = [
            make_project("C:\\src\\Api\\Api.csproj", [("Serilog", "2.12.0")]),
            make_project("C:\\src\\Worker\\Worker.csproj", [("Serilog", "3.1.1")]),
        ]

        conflicts = aggregate_conflicts(projects)

        assert conflicts[0].versions[0].sources == ["Api"]

    def test_transitive_conflict_across_projects(self) -> None:
        """Test a version pulled in transitively against a direct one."""
        resolver = TransitiveResolver(
            InMemoryMetadataSource({
                ("Alpha", "1.0"): [("Beta", "[2.0.0,3.0.0)")],
                ("Beta", "2.0.0,3.0.0"): [],
                ("Beta", "2.5.0"): [],
            })
        )
        projects = [
            resolver.enrich_project(make_project("/src/X/X.csproj", [("Alpha", "1.0")])),
            resolver.enrich_project(make_project("/src/Y/Y.csproj", [("Beta", "2.5.0")])),
        ]

        conflicts = aggregate_conflicts(projects)

        assert len(conflicts) == 1
        beta = conflicts[0]
        assert beta.package_name == "Beta"
        assert set(beta.get_version_strings()) == {"2.0.0,3.0.0", "2.5.0"}
        sources = {v.version: v.sources for v in beta.versions}
        assert sources["2.0.0,3.0.0"] == ["X (via Alpha 1.0 -> Beta 2.0.0,3.0.0)"]
        assert sources["2.5.0"] == ["Y"]

    def test_direct_wins_over_transitive_in_same_project(self) -> None:
        """Test that a package both direct and transitive is labelled direct."""
        project = ProjectInfo(
            project_path="/src/X/X.csproj",
            package_references=[
                PackageReference(name="Beta", version="2.0"),
                PackageReference(
                    name="Beta", version="2.0", is_transitive=True, origin_path="A 1 -> Beta 2.0"
                ),
                PackageReference(name="Beta", version="3.0"),
            ],
        )

        conflicts = aggregate_conflicts([project])

        assert conflicts[0].versions[0].sources == ["X"]

    def test_conflict_within_one_project(self) -> None:
        """Test that two versions inside a single project still conflict."""
        project = ProjectInfo(
            project_path="/src/X/X.csproj",
            package_references=[
                PackageReference(name="Beta", version="3.0"),
                PackageReference(
                    name="Beta", version="2.0", is_transitive=True, origin_path="A 1 -> Beta 2.0"
                ),
            ],
        )

        conflicts = aggregate_conflicts([project])

        assert conflicts[0].get_version_strings() == ["2.0", "3.0"]
        assert conflicts[0].versions[0].sources == ["X (via A 1 -> Beta 2.0)"]

    def test_no_projects(self) -> None:
        """Test that an empty solution has no conflicts."""
        assert aggregate_conflicts([]) == []


class TestAggregateTransitiveConflicts:
    """Tests for aggregate_transitive_conflicts."""

    def test_labels_are_direct_packages(self) -> None:
        """Test that versions are attributed to the direct package."""
        infos = [
            ProjectTransitiveInfo(
                project_path="/src/X/X.csproj",
                direct_packages=[
                    DirectPackageInfo(
                        name="A",
                        version="1",
                        transitive_packages=[
                            TransitivePackageInfo(
                                name="C", version="1", dependency_path=["A 1", "C 1"]
                            )
                        ],
                    ),
                    DirectPackageInfo(
                        name="B",
                        version="1",
                        transitive_packages=[
                            TransitivePackageInfo(
                                name="C", version="2", dependency_path=["B 1", "C 2"]
                            )
                        ],
                    ),
                ],
            )
        ]

        conflicts = aggregate_transitive_conflicts(infos)

        assert [(v.version, v.sources) for v in conflicts[0].versions] == [
            ("1", ["A 1"]),
            ("2", ["B 1"]),
        ]

    def test_direct_packages_are_not_compared(self) -> None:
        """Test that direct versions alone never conflict in this mode."""
        infos = [
            ProjectTransitiveInfo(
                project_path="/src/X/X.csproj",
                direct_packages=[DirectPackageInfo(name="A", version="1")],
            ),
            ProjectTransitiveInfo(
                project_path="/src/Y/Y.csproj",
                direct_packages=[DirectPackageInfo(name="A", version="2")],
            ),
        ]

        assert aggregate_transitive_conflicts(infos) == []


class TestConflictRecord:
    """Tests for ConflictRecord model."""

    def test_is_frozen(self) -> None:
        """Test that records cannot be modified."""
        record = ConflictRecord(
            package_name="Pkg",
            versions=[ConflictVersion(version="1", sources=["A"])],
        )
        with pytest.raises(ValidationError):
            record.package_name = "Other"  # type: ignore[misc]

    def test_forbids_extra_fields(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError):
            ConflictRecord(package_name="Pkg", severity="high")  # type: ignore[call-arg]

    def test_model_dump_includes_version_count(self) -> None:
        """Test that version_count is serialized."""
        record = ConflictRecord(
            package_name="Pkg",
            versions=[ConflictVersion(version="1"), ConflictVersion(version="2")],
        )
        assert record.model_dump()["version_count"] == 2
