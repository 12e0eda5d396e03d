"""Shared fixtures for conflict-analyzer tests."""

from pathlib import Path
from typing import Optional
from xml.sax.saxutils import quoteattr

import pytest
from click.testing import CliRunner

NUSPEC_NAMESPACE = "http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd"
CSHARP_PROJECT_TYPE = "FAE04EC0-301F-11D3-BF4B-00C04F79EFBC"


class NuGetCacheBuilder:
    """Writes a fake NuGet global packages folder."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def add(
        self,
        name: str,
        version: str,
        dependencies: Optional[list[tuple[str, str]]] = None,
        groups: Optional[dict[str, list[tuple[str, str]]]] = None,
    ) -> Path:
        """Add a package; ``dependencies`` are ungrouped, ``groups`` per framework."""
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            f'<package xmlns="{NUSPEC_NAMESPACE}">',
            "  <metadata>",
            f"    <id>{name}</id>",
            f"    <version>{version}</version>",
            "    <dependencies>",
        ]
        for framework, deps in (groups or {}).items():
            lines.append(f"      <group targetFramework={quoteattr(framework)}>")
            for dep_name, dep_version in deps:
                lines.append(
                    f"        <dependency id={quoteattr(dep_name)} "
                    f"version={quoteattr(dep_version)} />"
                )
            lines.append("      </group>")
        for dep_name, dep_version in dependencies or []:
            lines.append(
                f"      <dependency id={quoteattr(dep_name)} "
                f"version={quoteattr(dep_version)} />"
            )
        lines.extend(["    </dependencies>", "  </metadata>", "</package>"])
        return self.write_raw(name, version, "\n".join(lines))

    def write_raw(self, name: str, version: str, content: str) -> Path:
        """Write arbitrary manifest content for a package."""
        package_dir = self.root / name.lower() / version.lower()
        package_dir.mkdir(parents=True, exist_ok=True)
        nuspec = package_dir / f"{name.lower()}.nuspec"
        nuspec.write_text(content, encoding="utf-8")
        return nuspec


class SolutionBuilder:
    """Writes a fake solution with C# projects."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        self._projects: list[str] = []

    def add_project(
        self,
        name: str,
        packages: Optional[list[tuple[str, str]]] = None,
        project_refs: Optional[list[str]] = None,
        in_solution: bool = True,
    ) -> Path:
        """Add ``<root>/<name>/<name>.csproj``; project_refs are project names."""
        lines = ['<Project Sdk="Microsoft.NET.Sdk">', "  <ItemGroup>"]
        for pkg_name, pkg_version in packages or []:
            lines.append(
                f"    <PackageReference Include={quoteattr(pkg_name)} "
                f"Version={quoteattr(pkg_version)} />"
            )
        lines.append("  </ItemGroup>")
        if project_refs:
            lines.append("  <ItemGroup>")
            for ref in project_refs:
                lines.append(f'    <ProjectReference Include="..\\{ref}\\{ref}.csproj" />')
            lines.append("  </ItemGroup>")
        lines.append("</Project>")

        project_dir = self.root / name
        project_dir.mkdir(parents=True, exist_ok=True)
        project_path = project_dir / f"{name}.csproj"
        project_path.write_text("\n".join(lines), encoding="utf-8")
        if in_solution:
            self._projects.append(name)
        return project_path

    def write(self, file_name: str = "Solution.sln") -> Path:
        """Write the solution file listing the projects added so far."""
        lines = [
            "Microsoft Visual Studio Solution File, Format Version 12.00",
            "# Visual Studio Version 17",
        ]
        for index, name in enumerate(self._projects):
            guid = f"{index + 1:08d}-0000-0000-0000-000000000000"
            lines.append(
                f'Project("{{{CSHARP_PROJECT_TYPE}}}") = "{name}", '
                f'"{name}\\{name}.csproj", "{{{guid}}}"'
            )
            lines.append("EndProject")
        lines.append("Global")
        lines.append("EndGlobal")
        solution_path = self.root / file_name
        solution_path.write_text("\n".join(lines), encoding="utf-8")
        return solution_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def nuget_cache(tmp_path: Path) -> NuGetCacheBuilder:
    """Provide an empty fake NuGet package cache."""
    return NuGetCacheBuilder(tmp_path / "nuget-packages")


@pytest.fixture
def solution_builder(tmp_path: Path) -> SolutionBuilder:
    """Provide a builder for a solution directory."""
    return SolutionBuilder(tmp_path / "src")


@pytest.fixture(autouse=True)
def isolated_nuget_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Never read the developer's real NuGet cache."""
    monkeypatch.setenv("NUGET_PACKAGES", str(tmp_path / "default-nuget-cache"))
