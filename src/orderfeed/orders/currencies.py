"""Native currency addresses per chain."""

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"

# Native ETH is represented by the null address on every chain
NATIVE_ADDRESSES = {
    1: NULL_ADDRESS,
    5: NULL_ADDRESS,
    137: NULL_ADDRESS,
    11155111: NULL_ADDRESS,
}

WRAPPED_NATIVE_ADDRESSES = {
    1: "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    5: "0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6",
    137: "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270",
    11155111: "0x7b79995e5f793a07bc00c21412e50ecae098e7f9",
}


def default_currency(side: str, chain_id: int) -> str:
    """
    Currency used when an order carries no explicit currency.

    Asks are priced in the native currency, bids in its wrapped form.

    Raises:
        ValueError: If the chain is not configured
    """
    table = NATIVE_ADDRESSES if side == "sell" else WRAPPED_NATIVE_ADDRESSES
    if chain_id not in table:
        raise ValueError(f"No native currency configured for chain {chain_id}")
    return table[chain_id]
