"""
Nix workspace generator — produce ``.idx/dev.nix`` from a WorkspaceDescriptor.

The output is a Nix function ``{ pkgs, ... }: { ... }`` as consumed by
the managed workspace platform. Package names are emitted as bare
attribute paths inside ``with pkgs;``; everything else is a quoted Nix
string.
"""

from __future__ import annotations

import re

from phpjs_env.core.models.descriptor import PreviewProcess, WorkspaceDescriptor
from phpjs_env.core.models.template import GeneratedFile

DEV_NIX_PATH = ".idx/dev.nix"

_HEADER = """\
# Workspace descriptor for a PHP + Node.js toolchain.
# Generated by phpjs-env; regenerate with: phpjs-env generate nix --write --force
# See: https://firebase.google.com/docs/studio/customize-workspace
"""

# Attribute path such as ``php.packages.composer`` or ``nodejs_latest``
_PKG_PATH_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_'-]*(\.[A-Za-z_][A-Za-z0-9_'-]*)*$")

# Attribute name usable without quotes
_BARE_ATTR_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_'-]*$")

_INDENT = "  "


# ── Nix literals ────────────────────────────────────────────────


def nix_string(value: str) -> str:
    """Quote ``value`` as a double-quoted Nix string."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("${", "\\${")
        .replace("\n", "\\n")
    )
    return f'"{escaped}"'


def nix_attr_name(name: str) -> str:
    """Attribute name, quoted only when it is not a bare identifier."""
    if _BARE_ATTR_RE.match(name):
        return name
    return nix_string(name)


def invalid_packages(packages: list[str]) -> list[str]:
    """Package entries that are not valid ``pkgs`` attribute paths."""
    return [p for p in packages if not _PKG_PATH_RE.match(p)]


def _string_attrset(values: dict[str, str], depth: int) -> list[str]:
    """Render ``{ k = "v"; ... }`` lines, opening brace excluded."""
    if not values:
        return []
    pad = _INDENT * (depth + 1)
    return [f"{pad}{nix_attr_name(k)} = {nix_string(v)};" for k, v in values.items()]


def _block(name: str, body: list[str], depth: int) -> list[str]:
    pad = _INDENT * depth
    if not body:
        return [f"{pad}{name} = {{ }};"]
    return [f"{pad}{name} = {{", *body, f"{pad}}};"]


def _preview(name: str, preview: PreviewProcess, depth: int) -> list[str]:
    pad = _INDENT * (depth + 1)
    command = " ".join(nix_string(part) for part in preview.command)
    body = [
        f"{pad}command = [ {command} ];",
        f"{pad}manager = {nix_string(preview.manager)};",
        *_block("env", _string_attrset(preview.env, depth + 1), depth + 1),
    ]
    return _block(nix_attr_name(name), body, depth)


# ── Public API ──────────────────────────────────────────────────


def render_dev_nix(descriptor: WorkspaceDescriptor) -> str:
    """Render the full dev.nix text.

    Raises:
        ValueError: A package entry is not a valid attribute path.
    """
    bad = invalid_packages(descriptor.packages)
    if bad:
        raise ValueError(f"Invalid Nix package name(s): {', '.join(bad)}")

    lines: list[str] = [_HEADER.rstrip("\n"), "{ pkgs, ... }: {", ""]
    lines.append(f"{_INDENT}channel = {nix_string(descriptor.channel)};")
    lines.append("")

    if descriptor.packages:
        lines.append(f"{_INDENT}packages = with pkgs; [")
        lines.extend(f"{_INDENT * 2}{pkg}" for pkg in descriptor.packages)
        lines.append(f"{_INDENT}];")
    else:
        lines.append(f"{_INDENT}packages = [ ];")
    lines.append("")

    lines.extend(_block("env", _string_attrset(descriptor.env, 1), 1))
    lines.append("")

    idx: list[str] = []
    extensions = " ".join(nix_string(e) for e in descriptor.extensions)
    idx.append(f"{_INDENT * 2}extensions = [ {extensions} ];" if extensions
               else f"{_INDENT * 2}extensions = [ ];")
    idx.append("")

    previews: list[str] = []
    for name, preview in descriptor.previews.items():
        previews.extend(_preview(name, preview, 4))
    enable = "true" if descriptor.previews_enabled else "false"
    idx.extend(_block(
        "previews",
        [f"{_INDENT * 3}enable = {enable};", *_block("previews", previews, 3)],
        2,
    ))
    idx.append("")

    workspace = [
        *_block("onCreate", _string_attrset(descriptor.on_create, 3), 3),
        *_block("onStart", _string_attrset(descriptor.on_start, 3), 3),
    ]
    idx.extend(_block("workspace", workspace, 2))

    lines.extend(_block("idx", idx, 1))
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_dev_nix(
    descriptor: WorkspaceDescriptor,
    *,
    output_path: str = DEV_NIX_PATH,
) -> GeneratedFile:
    """Generate the workspace descriptor file.

    Raises:
        ValueError: See ``render_dev_nix``.
    """
    return GeneratedFile(
        path=output_path,
        content=render_dev_nix(descriptor),
        descriptor="workspace",
        overwrite=False,
        reason=f"Workspace descriptor ({len(descriptor.packages)} packages)",
    )
