# topmark:header:start
#
#   project      : PartialFmt
#   file         : io.py
#   file_relpath : src/partialfmt/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render PartialFmt policy from TOML sources.

Settings live in the ``[tool.partialfmt]`` table of ``pyproject.toml`` or at the
top level of a stand-alone ``partialfmt.toml``. Parsing is done with
`tomlkit`; documents are unwrapped to plain ``dict`` structures before the
values are checked.

Unknown keys are logged and ignored. Values of the wrong type raise
[`ConfigError`][partialfmt.core.errors.ConfigError].
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from partialfmt.config.logging import get_logger
from partialfmt.config.policy import BlankLineMergeMode, MutableOutputPolicy
from partialfmt.constants import (
    PARTIALFMT_TOML_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_TABLE,
)
from partialfmt.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from partialfmt.config.logging import PartialfmtLogger
    from partialfmt.config.policy import OutputPolicy

logger: PartialfmtLogger = get_logger(__name__)

TomlTable = dict[str, Any]

KEY_COMMENT_PREFIXES: Final[str] = "comment_prefixes"
KEY_BLANK_LINE_MERGE: Final[str] = "blank_line_merge"
KEY_PREVIEW_REPLACEMENTS: Final[str] = "preview_replacements"

KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {KEY_COMMENT_PREFIXES, KEY_BLANK_LINE_MERGE, KEY_PREVIEW_REPLACEMENTS}
)


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"{source}: invalid TOML: {exc}") from exc
    data_any: Any = doc.unwrap()
    return data_any if isinstance(data_any, dict) else {}


def policy_from_table(table: Mapping[str, Any], *, source: str = "<table>") -> MutableOutputPolicy:
    """Build a tri-state policy from a settings table.

    Args:
        table (Mapping[str, Any]): The ``[tool.partialfmt]`` (or top-level) table.
        source (str): Name used in messages.

    Returns:
        MutableOutputPolicy: Policy with ``None`` for every key not present.

    Raises:
        ConfigError: If a known key has a value of the wrong type.
    """
    for key in sorted(set(table) - KNOWN_KEYS):
        logger.warning("%s: ignoring unknown key %r", source, key)

    policy = MutableOutputPolicy()

    prefixes: Any = table.get(KEY_COMMENT_PREFIXES)
    if prefixes is not None:
        if not isinstance(prefixes, list) or not all(
            isinstance(p, str) and p for p in prefixes
        ):
            raise ConfigError(
                f"{source}: {KEY_COMMENT_PREFIXES} must be a list of non-empty strings"
            )
        policy.comment_prefixes = tuple(prefixes)

    merge: Any = table.get(KEY_BLANK_LINE_MERGE)
    if merge is not None:
        try:
            policy.blank_line_merge = BlankLineMergeMode(merge)
        except ValueError as exc:
            allowed: str = ", ".join(m.value for m in BlankLineMergeMode)
            raise ConfigError(
                f"{source}: {KEY_BLANK_LINE_MERGE} must be one of {allowed}, got {merge!r}"
            ) from exc

    preview: Any = table.get(KEY_PREVIEW_REPLACEMENTS)
    if preview is not None:
        if not isinstance(preview, bool):
            raise ConfigError(f"{source}: {KEY_PREVIEW_REPLACEMENTS} must be a boolean")
        policy.preview_replacements = preview

    logger.debug("%s: loaded policy %s", source, policy)
    return policy


def load_policy_from_toml_text(
    text: str,
    *,
    pyproject: bool = False,
    source: str = "<string>",
) -> MutableOutputPolicy:
    """Load a policy from TOML text.

    Args:
        text (str): TOML document text.
        pyproject (bool): If True, read the ``[tool.partialfmt]`` table; otherwise
            read the top-level table.
        source (str): Name used in messages.

    Returns:
        MutableOutputPolicy: The loaded tri-state policy (all unset if the table is absent).
    """
    data: TomlTable = parse_toml_text(text, source=source)
    if pyproject:
        for key in PYPROJECT_TOOL_TABLE:
            sub: Any = data.get(key)
            if not isinstance(sub, dict):
                logger.debug("%s: no [%s] table", source, ".".join(PYPROJECT_TOOL_TABLE))
                return MutableOutputPolicy()
            data = sub
    return policy_from_table(data, source=source)


def load_policy_from_path(path: Path) -> MutableOutputPolicy:
    """Load a policy from ``pyproject.toml`` or a stand-alone ``partialfmt.toml``.

    Raises:
        ConfigError: If the file is not valid TOML or has wrong value types.
        OSError: If the file cannot be read.
    """
    text: str = path.read_text(encoding="utf-8")
    return load_policy_from_toml_text(
        text,
        pyproject=path.name == PYPROJECT_TOML_NAME,
        source=str(path),
    )


def load_policy_from_dir(directory: Path) -> MutableOutputPolicy:
    """Load the layered policy of a project directory.

    ``pyproject.toml`` is read first and a stand-alone ``partialfmt.toml`` is
    applied over it. Missing files are skipped.

    Args:
        directory (Path): The project directory.

    Returns:
        MutableOutputPolicy: The merged tri-state policy (all unset if neither file exists).
    """
    policy = MutableOutputPolicy()
    for name in (PYPROJECT_TOML_NAME, PARTIALFMT_TOML_NAME):
        path: Path = directory / name
        if not path.is_file():
            logger.trace("%s: not found", path)
            continue
        logger.debug("Loading policy from %s", path)
        policy = policy.merge_with(load_policy_from_path(path))
    return policy


def policy_to_toml(policy: OutputPolicy, *, for_pyproject: bool = False) -> str:
    """Render a resolved policy as TOML text.

    Args:
        policy (OutputPolicy): The policy to render.
        for_pyproject (bool): If True, nest the output under ``[tool.partialfmt]``.

    Returns:
        str: TOML document text.
    """
    values: TomlTable = {
        KEY_COMMENT_PREFIXES: list(policy.comment_prefixes),
        KEY_BLANK_LINE_MERGE: policy.blank_line_merge.value,
        KEY_PREVIEW_REPLACEMENTS: policy.preview_replacements,
    }

    doc: tomlkit.TOMLDocument = tomlkit.document()
    if for_pyproject:
        table = tomlkit.table()
        for key, value in values.items():
            table.add(key, value)
        tool = tomlkit.table(is_super_table=True)
        tool.add(PYPROJECT_TOOL_TABLE[1], table)
        doc.add(PYPROJECT_TOOL_TABLE[0], tool)
    else:
        for key, value in values.items():
            doc.add(key, value)
    return tomlkit.dumps(doc)
