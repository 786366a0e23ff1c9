# -*- coding: utf-8 -*-
#
# This file is part of `glmkit`, a library for GridLAB-D `.glm` feeder models
#
# Copyright © 2026 by the glmkit authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Configuration for glmkit.

Loaded from:

1. Defaults (this file)
2. Config file (``~/.config/glmkit/config.toml``) if it exists
3. Environment variables (``GLMKIT_*``) override the file

Example config file::

    [format]
    indent_width = 4
    semicolon = false

    [index]
    properties = ["name", "class", "parent", "from", "to", "phases"]

    [sign]
    tool = "glmkit"

"""

import contextlib
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path


logger = logging.getLogger(__name__)


#: The properties the lookup index of a document covers by default.
INDEXED_PROPERTIES = ('name', 'class', 'parent', 'from', 'to')


@dataclass
class FormatConfig:
    """How objects are written."""
    indent_width: int = 2
    semicolon: bool = True  # default closing flag for objects created in code


@dataclass
class IndexConfig:
    """Which properties the lookup index covers."""
    properties: tuple = INDEXED_PROPERTIES


@dataclass
class SignConfig:
    """The signature block put in a wrangled document."""
    tool: str = "glmkit"


@dataclass
class Config:
    """Root config with all settings."""
    format: FormatConfig = field(default_factory=FormatConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    sign: SignConfig = field(default_factory=SignConfig)


def get_config_path():
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "glmkit" / "config.toml"
    return Path.home() / ".config" / "glmkit" / "config.toml"


def load_config():
    """Load config from file if it exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("ignoring config file %s: %s", path, e)
        else:
            config = _apply_toml(config, data)

    # env var overrides
    config = _apply_env(config)

    return config


def _properties(value):
    """Convert a list or a comma separated string to a tuple of names."""
    if isinstance(value, str):
        value = value.split(',')
    return tuple(name.strip() for name in value if name.strip())


def _apply_toml(config, data):
    """Apply toml data to config."""
    if "format" in data:
        f = data["format"]
        if "indent_width" in f:
            config.format.indent_width = int(f["indent_width"])
        if "semicolon" in f:
            config.format.semicolon = bool(f["semicolon"])

    if "index" in data:
        i = data["index"]
        if "properties" in i:
            config.index.properties = _properties(i["properties"])

    if "sign" in data:
        s = data["sign"]
        if "tool" in s:
            config.sign.tool = str(s["tool"])

    return config


def _apply_env(config):
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "GLMKIT_INDENT_WIDTH": ("format", "indent_width", int),
        "GLMKIT_SEMICOLON": ("format", "semicolon", bool),
        "GLMKIT_INDEX_PROPERTIES": ("index", "properties", _properties),
        "GLMKIT_TOOL": ("sign", "tool", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                # "true", "1", "yes" -> True
                converted = val.lower() in ("true", "1", "yes") if conv is bool else conv(val)
                setattr(getattr(config, section), attr, converted)

    return config


_config = None


def get_config():
    """Get the global config instance, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config():
    """Forget the global config instance; the next get_config() reloads it."""
    global _config
    _config = None
