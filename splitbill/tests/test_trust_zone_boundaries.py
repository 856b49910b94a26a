"""Import-boundary rules between package zones, as listed in docs/trust_zone.md."""

from __future__ import annotations

import ast
import importlib.util
import re
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
_DOC = _ROOT / "docs" / "trust_zone.md"
_PACKAGE = "splitbill"
_ALLOWED = {
    "Pure": {"Pure"},
    "Privileged": {"Privileged", "Pure"},
    "Orchestrator": {"Orchestrator", "Privileged", "Pure"},
}


def _zone_mapping() -> dict[tuple[str, ...], str]:
    mapping: dict[tuple[str, ...], str] = {}
    in_mapping = False
    zone: str | None = None
    for line in _DOC.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped == "Current Directory Mapping":
            in_mapping = True
            continue
        if stripped == "Dependency Rules":
            break
        if not in_mapping:
            continue
        token = re.match(r"^\s*-\s+`([^`]+)`", line)
        if token is None:
            continue
        value = token.group(1).strip()
        if value in _ALLOWED:
            zone = value
        elif zone is not None:
            mapping[tuple(p for p in value.strip("/").split("/") if p)] = zone
    return mapping


def _zone_of(parts: tuple[str, ...], mapping: dict[tuple[str, ...], str]) -> str | None:
    for prefix in sorted(mapping, key=len, reverse=True):
        if parts[: len(prefix)] == prefix:
            return mapping[prefix]
    return None


def _imports(path: Path) -> list[str]:
    parts = list(path.relative_to(_ROOT).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
        package = ".".join([_PACKAGE, *parts])
    else:
        package = ".".join([_PACKAGE, *parts[:-1]])

    found: list[str] = []
    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"), filename=str(path))):
        if isinstance(node, ast.Import):
            found.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0:
                if node.module:
                    found.append(node.module)
            else:
                found.append(importlib.util.resolve_name("." * node.level + (node.module or ""), package))
    return found


def test_zone_paths_exist() -> None:
    mapping = _zone_mapping()
    assert set(mapping.values()) == set(_ALLOWED)
    missing = [str(Path(*parts)) for parts in mapping if not (_ROOT / Path(*parts)).is_dir()]
    assert not missing, f"Zone paths in {_DOC.name} do not exist: {missing}"


def test_zone_import_boundaries() -> None:
    mapping = _zone_mapping()
    violations: list[str] = []
    for prefix, source_zone in mapping.items():
        for path in sorted((_ROOT / Path(*prefix)).rglob("*.py")):
            for module in _imports(path):
                if not module.startswith(f"{_PACKAGE}."):
                    continue
                target_zone = _zone_of(tuple(module.split(".")[1:]), mapping)
                if target_zone is not None and target_zone not in _ALLOWED[source_zone]:
                    violations.append(f"{path.relative_to(_ROOT)}: {source_zone} imports {module} ({target_zone})")
    assert not violations, "Zone import violations:\n" + "\n".join(violations)


def test_pure_zone_has_no_io_imports() -> None:
    forbidden = {"httpx", "fastapi", "starlette", "uvicorn", "logging", "os", "subprocess"}
    offenders: list[str] = []
    for prefix, zone in _zone_mapping().items():
        if zone != "Pure":
            continue
        for path in sorted((_ROOT / Path(*prefix)).rglob("*.py")):
            for module in _imports(path):
                if module.split(".")[0] in forbidden:
                    offenders.append(f"{path.relative_to(_ROOT)}: {module}")
    assert not offenders, "Pure modules import I/O libraries:\n" + "\n".join(offenders)
