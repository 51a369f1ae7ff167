from __future__ import annotations

import ast
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src" / "tdsync"


def _collect_python_files(directory: Path) -> list[Path]:
    return sorted(path for path in directory.rglob("*.py") if path.is_file())


def _find_forbidden_imports(files: list[Path], forbidden_prefixes: tuple[str, ...]) -> list[str]:
    violations: list[str] = []
    for path in files:
        module = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(module):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.startswith(forbidden_prefixes):
                        violations.append(f"{path}: import {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                if node.module is None:
                    continue
                if node.module.startswith(forbidden_prefixes):
                    violations.append(f"{path}: from {node.module} import ...")
    return violations


def test_contracts_only_depend_on_contracts() -> None:
    files = _collect_python_files(_SRC / "contracts")
    violations = _find_forbidden_imports(
        files, ("tdsync.engine", "tdsync.providers", "tdsync.mapping", "tdsync.cli", "tdsync.state")
    )
    assert not violations, f"contracts import higher layers: {violations}"


def test_engine_does_not_import_concrete_providers_or_cli() -> None:
    files = _collect_python_files(_SRC / "engine")
    violations = _find_forbidden_imports(files, ("tdsync.providers", "tdsync.mapping", "tdsync.cli"))
    assert not violations, f"engine imports provider or cli modules: {violations}"


def test_mapping_does_not_import_providers() -> None:
    files = _collect_python_files(_SRC / "mapping")
    violations = _find_forbidden_imports(files, ("tdsync.providers", "tdsync.engine", "tdsync.cli"))
    assert not violations, f"mapping imports provider or engine modules: {violations}"


def test_only_jira_provider_uses_http_client() -> None:
    files = [path for path in _collect_python_files(_SRC) if "jira" not in path.parts]
    violations = _find_forbidden_imports(files, ("httpx",))
    assert not violations, f"httpx used outside the Jira provider: {violations}"
