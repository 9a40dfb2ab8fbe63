"""Shared fixtures: a shell config that runs tests/fake_shell.py."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest

from poshell.config import ShellConfig
from poshell.session import Shell

FAKE_SHELL = Path(__file__).parent / "fake_shell.py"


def make_fake_config(
    code_page: int = 65001,
    encoding: str = "utf-8",
    chcp: str | None = None,
    **overrides,
) -> ShellConfig:
    env = {
        "FAKE_SHELL_CODE_PAGE": str(code_page),
        "FAKE_SHELL_ENCODING": encoding,
    }
    if chcp is not None:
        env["FAKE_SHELL_CHCP"] = chcp
    return ShellConfig(
        executable=sys.executable,
        arguments=[str(FAKE_SHELL), "-NoLogo", "-NoExit", "-Command", "-"],
        env=env,
        **overrides,
    )


@pytest.fixture
def shell_factory() -> Iterator[Callable[..., Shell]]:
    """Start shells against the fake and make sure they are gone afterwards."""
    shells: list[Shell] = []

    def _start(**kwargs) -> Shell:
        code_page = kwargs.pop("fixed_code_page", None)
        config = make_fake_config(**kwargs)
        if code_page is None:
            shell = Shell.new(config)
        else:
            shell = Shell.new_with_code_page(code_page, config)
        shells.append(shell)
        return shell

    yield _start

    for shell in shells:
        if shell.alive:
            shell.exit()
        shell._proc.wait(timeout=10)


@pytest.fixture
def shell(shell_factory: Callable[..., Shell]) -> Shell:
    return shell_factory()


@pytest.fixture
def fake_config() -> Callable[..., ShellConfig]:
    return make_fake_config
