"""Centralized file names, network endpoints, and APRO constants."""

from __future__ import annotations

# -- Project files --

ANCHOR_TOML = "Anchor.toml"
CARGO_TOML = "Cargo.toml"
BACKUP_SUFFIX = ".bak"
SOURCE_EXTENSION = ".rs"

# Directories never descended into while scanning (matched on basename)
SKIPPED_DIRS: frozenset[str] = frozenset({"target", "node_modules", ".git"})

# Upper bound on directory nesting for the file walker
MAX_WALK_DEPTH = 64

# -- SOON Network RPC endpoints --

SOON_MAINNET_RPC = "https://rpc.mainnet.soo.network/rpc"
SOON_TESTNET_RPC = "https://rpc.testnet.soo.network/rpc"
SOON_DEVNET_RPC = "https://rpc.devnet.soo.network/rpc"

CLUSTER_ENDPOINTS: dict[str, str] = {
	"mainnet-beta": SOON_MAINNET_RPC,
	"mainnet": SOON_MAINNET_RPC,
	"testnet": SOON_TESTNET_RPC,
	"devnet": SOON_DEVNET_RPC,
}

# Programs section key renamed to the target network
LOCALNET_PROGRAMS_KEY = "localnet"

# -- APRO oracle --

APRO_PROGRAM_ID_DEVNET = "4Mvy4RKRyJMf4PHavvGUuTj9agoddUZ9atQoFma1tyMY"
APRO_PROGRAM_ID_MAINNET = "4Mvy4RKRyJMf4PHavvGUuTj9agoddUZ9atQoFma1tyMY"
APRO_API_DEVNET = "https://live-api-test.apro.com"
APRO_API_MAINNET = "https://live-api.apro.com"

APRO_DEVNET_PRICE_FEEDS: tuple[tuple[str, str], ...] = (
	("BTC/USD", "0x0003665949c883f9e0f6f002eac32e00bd59dfe6c34e92a91c37d6a8322d6489"),
	("ETH/USD", "0x0003555ace6b39aae1b894097d0a9fc17f504c62fea598fa206cc6f5088e6e45"),
	("SOL/USD", "0x000343ec7f6691d6bf679978bab5c093fa45ee74c0baac6cc75649dc59cc21d3"),
	("USDT/USD", "0x00039a0c0be4e43cacda1599ac414205651f4a62b614b6be9e5318a182c33eb0"),
	("USDC/USD", "0x00034b881a0c0fff844177f881a313ff894bfc6093d33b5514e34d7faa41b7ef"),
)

# -- Progress spinner --

SPINNER_TICK_SECONDS = 0.1
SPINNER_FRAMES = "/|\\- "
