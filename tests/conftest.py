"""Shared fixtures: throwaway Anchor projects on disk."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

ANCHOR_TOML = """\
[toolchain]

[features]
resolution = true
skip-lint = false

[programs.localnet]
migration = "EtQdsPNDckBhME3gRjcj9Z4Z9tGEYAoHjWKv7aHJgBua"

[registry]
url = "https://api.apr.dev"

[provider]
cluster = "devnet"
wallet = "~/.config/solana/id.json"

[scripts]
test = "yarn run ts-mocha -p ./tsconfig.json -t 1000000 tests/**/*.ts"
"""

CARGO_TOML = """\
[package]
name = "test"
version = "0.1.0"

[dependencies]
anchor-lang = "0.28.0"
"""

PYTH_SOURCE = """\
use anchor_lang::prelude::*;
use pyth_solana_receiver_sdk::PriceUpdateV2;

pub fn get_price() -> Result<()> {
    // Get price from Pyth
    let price = price_update.get_price_no_older_than(&clock, 60)?;
    Ok(())
}
"""

MakeProject = Callable[..., Path]


@pytest.fixture()
def make_project(tmp_path: Path) -> MakeProject:
	"""Factory writing Anchor.toml, Cargo.toml and optional sources under tmp_path."""

	def _make(
		name: str = "project",
		anchor: str = ANCHOR_TOML,
		cargo_extra: str = "",
		sources: dict[str, str] | None = None,
	) -> Path:
		root = tmp_path / name
		root.mkdir(parents=True, exist_ok=True)
		(root / "Anchor.toml").write_text(anchor)
		(root / "Cargo.toml").write_text(CARGO_TOML + cargo_extra)
		for rel_path, content in (sources or {}).items():
			target = root / rel_path
			target.parent.mkdir(parents=True, exist_ok=True)
			target.write_text(content)
		return root

	return _make


@pytest.fixture()
def anchor_project(make_project: MakeProject) -> Path:
	"""Minimal Anchor project with no oracle usage."""
	return make_project()


@pytest.fixture()
def pyth_project(make_project: MakeProject) -> Path:
	"""Anchor project depending on and importing the Pyth receiver SDK."""
	return make_project(
		cargo_extra='pyth-solana-receiver-sdk = "0.2.0"\n',
		sources={"src/price.rs": PYTH_SOURCE},
	)
