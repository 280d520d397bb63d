"""Configuration constants for fundme-deploy."""

# Local chains used for development, mapped to their chain ids
# These networks have no registry entry and no price feed of their own
DEVELOPMENT_CHAINS = {
    "localhost": 31337,
    "hardhat": 31337,
    "ganache": 1337,
}

# Public networks, keyed by the name used in DEPLOY_NETWORK
NETWORK_CONFIG = {
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "block_explorer_url": "https://sepolia.etherscan.io",
        "explorer_api_url": "https://api.etherscan.io/v2/api",
        "rpc_env": "SEPOLIA_RPC_URL",
        "price_feed_env": "SEPOLIA_PRICEFEED_ADDRESS",
        "private_key_env": "SEPOLIA_ACCOUNT_PRIVATE_KEY",
    },
}

DEFAULT_NETWORK = "localhost"
DEFAULT_LOCAL_RPC_URL = "http://127.0.0.1:8545/"

# ETH/USD price feed used when the network has none configured
FALLBACK_PRICE_FEED_ADDRESS = "0x8A753747A1Fa494EC906cE90E9f37563A8AF630e"

# Value an unset private key variable resolves to
PLACEHOLDER_PRIVATE_KEY = "0x"

FUND_AMOUNT_ETHER = "0.029"
FUNDER_INDEX = 1

DEVELOPMENT_CONFIRMATIONS = 1
PUBLIC_CONFIRMATIONS = 6

SOLIDITY_VERSION = "0.8.18"

CONTRACT_NAME = "FundMe"
CONTRACT_SOURCE = "contracts/FundMe.sol"

ALREADY_VERIFIED_MARKER = "already verified"
