from __future__ import annotations

from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"


def test_every_package_is_found_without_namespace_lookup() -> None:
    setuptools = pytest.importorskip("setuptools")

    packages = set(setuptools.find_packages(where=str(SRC)))

    assert {
        "rawedit",
        "rawedit.actions",
        "rawedit.buffer",
        "rawedit.keymaps",
        "rawedit.render",
        "rawedit.runtime",
        "rawedit.terminal",
    } <= packages
