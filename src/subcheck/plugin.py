"""pytest plugin: loads failure formatting settings at session start."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from subcheck.config import apply_config, load_config
from subcheck.formatting import Formatting, configure
from subcheck.verbose import setup_logger, teardown_logger

logger = logging.getLogger(__name__)

_PREVIOUS_FORMATTING = pytest.StashKey[Formatting]()
_DEBUG_LOGGER = pytest.StashKey[str]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("subcheck", "subcheck failure reporting")
    group.addoption(
        "--subcheck-config",
        dest="subcheck_config",
        default=None,
        help="Path to a subcheck YAML config (indent, type_formatter)",
    )
    group.addoption(
        "--subcheck-debug-log",
        dest="subcheck_debug_log",
        default=None,
        help="Write subcheck debug output to this file",
    )
    group.addoption(
        "--subcheck-verbose",
        dest="subcheck_verbose",
        action="store_true",
        default=False,
        help="Also write subcheck debug output to stderr",
    )
    parser.addini("subcheck_config", "Path to a subcheck YAML config", default="")


def _config_path(config: pytest.Config) -> Path | None:
    option = config.getoption("subcheck_config")
    if option:
        return Path(option)
    ini = config.getini("subcheck_config")
    if ini:
        return config.rootpath / ini
    return None


def pytest_configure(config: pytest.Config) -> None:
    debug_log = config.getoption("subcheck_debug_log")
    if debug_log:
        setup_logger(
            Path(debug_log),
            verbose=config.getoption("subcheck_verbose"),
            logger_name="subcheck",
        )
        config.stash[_DEBUG_LOGGER] = "subcheck"

    path = _config_path(config)
    if path is None:
        return
    if not path.exists():
        raise pytest.UsageError(f"subcheck config file not found: {path}")
    try:
        cfg = load_config(path)
    except ValueError as e:
        raise pytest.UsageError(f"invalid subcheck config {path}: {e}") from e
    config.stash[_PREVIOUS_FORMATTING] = apply_config(cfg)
    logger.debug(f"Applied config {path}: indent={cfg.indent!r} type_formatter={cfg.type_formatter}")


def pytest_unconfigure(config: pytest.Config) -> None:
    previous = config.stash.get(_PREVIOUS_FORMATTING, None)
    if previous is not None:
        configure(previous)
    name = config.stash.get(_DEBUG_LOGGER, None)
    if name is not None:
        teardown_logger(name)


def pytest_report_header(config: pytest.Config) -> str | None:
    path = _config_path(config)
    if path is None:
        return None
    return f"subcheck: config {path}"
