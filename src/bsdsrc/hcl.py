"""HCL loading — parse .hcl files into source configurations."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import hcl2
import jinja2

from .config import SourceConfig

logger = logging.getLogger(__name__)

BLOCK_TYPE = "source"

# ${env.NAME} or ${CWD}
_REF_PATTERN = re.compile(r"\$\{(env\.)?(\w+)\}")

_templates = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def load(
    file: str | Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Render file as a Jinja2 template with context, then parse it as HCL."""
    file = Path(file)
    try:
        text = _templates.from_string(file.read_text()).render(context or {})
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc
    return hcl2.loads(text)


def _decode_config(name: str, attrs: dict[str, Any]) -> SourceConfig:
    """Build a SourceConfig from one source block.

    String attributes may reference ${env.NAME} (empty when unset) and
    ${CWD}; any other reference is left as written.
    """
    logger.debug("Decoding source block '%s'", name)

    def expand(match: re.Match) -> str:
        is_env, ref = match.groups()
        if is_env:
            if ref not in os.environ:
                logger.warning("Source '%s': environment variable '%s' is not set", name, ref)
            return os.environ.get(ref, "")
        if ref == "CWD":
            return os.getcwd()
        logger.warning("Source '%s': unknown variable '%s'", name, ref)
        return match.group(0)

    fields = {
        key: _REF_PATTERN.sub(expand, value) if isinstance(value, str) else value
        for key, value in attrs.items()
    }
    return SourceConfig(**fields)


def load_configs(
    file: str | Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, SourceConfig]:
    """Return every source block in file, keyed by block label.

    HCL2 structure for source blocks:
        {"source": [{"world": {"src_dir": "/usr/src"}}, ...]}
    """
    file = Path(file)
    data = load(file, context=context)
    configs: dict[str, SourceConfig] = {}
    for block in data.get(BLOCK_TYPE, []):
        for name, attrs in block.items():
            if name in configs:
                raise ValueError(f"{file}: duplicate source block: '{name}'")
            configs[name] = _decode_config(name, dict(attrs))
    logger.debug("Loaded %d source block(s) from %s", len(configs), file)
    return configs


def load_config(
    file: str | Path,
    name: str | None = None,
    *,
    context: dict[str, Any] | None = None,
) -> SourceConfig:
    """Return a single source block from file.

    Without a name, the file must define exactly one source block.
    """
    configs = load_configs(file, context=context)
    if name is None:
        if len(configs) != 1:
            raise ValueError(f"{file}: expected exactly one source block, found {len(configs)}")
        return next(iter(configs.values()))
    if name not in configs:
        raise ValueError(f"{file}: unknown source block: '{name}'")
    return configs[name]
