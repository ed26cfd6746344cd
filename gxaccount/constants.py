"""
GXAccount SDK - Constants

Centralized configuration constants for the SDK.
"""

# =============================================================================
# Environments
# =============================================================================

PRODUCTION = "production"
DEVELOPMENT = "development"

# Protocol marker that upgrades faucet URLs to TLS
HTTPS_PROTOCOLS = ("https:", "https")


# =============================================================================
# Default Endpoints
# =============================================================================

DEFAULT_FAUCET_URL = "https://opengateway.gxb.io"
DEFAULT_DEV_FAUCET_URL = "http://testnet.faucet.gxchain.org"

DEFAULT_RPC_URL = "https://node1.gxb.io"

# Seconds before an HTTP call to the node or faucet is abandoned
DEFAULT_TIMEOUT = 30


# =============================================================================
# Faucet Endpoints
# =============================================================================

REGISTER_ACCOUNT_PATH = "/account/register"
MERCHANT_INFO_PATH = "/merchant/info"
MERCHANT_CREATE_PATH = "/merchant/create"
DATA_SOURCE_CREATE_PATH = "/dataSource/create"
APPLY_STATUS_PATH = "/account/apply_status"
LEAGUE_MEMBERS_PATH = "/leagueDataSource/memberInfo"

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


# =============================================================================
# Node RPC
# =============================================================================

DATABASE_API = "database"

GET_ACCOUNT_BY_NAME = "get_account_by_name"
GET_KEY_REFERENCES = "get_key_references"
GET_OBJECTS = "get_objects"


# =============================================================================
# Keys and Signatures
# =============================================================================

# Public key string prefix (GXChain mainnet)
DEFAULT_ADDRESS_PREFIX = "GXC"

# WIF version byte
WIF_VERSION = 0x80

# Words in a suggested brain key
BRAIN_KEY_WORD_COUNT = 16

# Compact signature header: 27 + 4 (compressed public key) + recovery id
COMPACT_SIGNATURE_OFFSET = 27 + 4

# Account type whose requests are signed with the merchant key;
# every other account type signs with the data-source key
MERCHANT = "merchant"
DATASOURCE = "datasource"
