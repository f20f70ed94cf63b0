"""Small helpers shared by the client and the naming services."""

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"

# Public project id used when no url or provider is configured.
DEFAULT_INFURA_PROJECT_ID = "213fff28936343858ca9c5115eff1419"


def signed_infura_link(project_id: str, network: str = "mainnet") -> str:
    """Build an Infura JSON-RPC endpoint for a project id and network."""
    return f"https://{network}.infura.io/v3/{project_id}"


def is_null_address(address: str | None) -> bool:
    """Whether ``address`` is empty or the all-zero address."""
    if not address:
        return True
    stripped = address.lower().removeprefix("0x")
    return not stripped or set(stripped) == {"0"}
