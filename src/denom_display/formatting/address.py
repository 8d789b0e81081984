from __future__ import annotations

from ..constants import ADDRESS_ALIASES


def shorten_address(
    address: str, prefix_length: int = 6, suffix_length: int = 4
) -> str:
    """Shorten an address for display, or return its alias if one is known.

    Args:
        address: Full hex (``0x...``) or bech32 (``hrp1...``) address
        prefix_length: Characters kept at the start of hex addresses
        suffix_length: Characters kept at the end

    Returns:
        The alias, ``"prefix...suffix"``, ``"hrp1...suffix"``, or the
        address unchanged when it is already short.

    Raises:
        TypeError: If ``address`` is not a string
    """
    if not address:
        return "Invalid address"
    if not isinstance(address, str):
        raise TypeError(f"address must be a string, got {type(address).__name__}")

    alias = ADDRESS_ALIASES.get(address.lower())
    if alias:
        return alias

    if address.startswith("0x"):
        if len(address) < prefix_length + suffix_length + 3:
            return address
        return f"{address[:prefix_length]}...{address[-suffix_length:]}"

    # bech32: keep the human-readable part and separator
    hrp, separator, data = address.partition("1")
    if separator:
        if len(data) <= suffix_length:
            return address
        return f"{hrp}1...{data[-suffix_length:]}"

    if len(address) <= prefix_length + suffix_length + 3:
        return address
    return f"{address[:prefix_length]}...{address[-suffix_length:]}"
