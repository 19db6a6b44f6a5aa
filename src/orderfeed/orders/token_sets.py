"""Token-set references: what an order applies to.

A token-set id is stored as a tagged string. It is parsed once into one of
four variants and everything downstream dispatches on the variant type.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class SingleToken:
    contract: str
    token_id: str

    @property
    def token_set_id(self) -> str:
        return f"token:{self.contract}:{self.token_id}"


@dataclass(frozen=True)
class ContractWide:
    collection_id: str

    @property
    def token_set_id(self) -> str:
        return f"contract:{self.collection_id}"


@dataclass(frozen=True)
class TokenRange:
    collection_id: str  # <contract>:<start>:<end>

    @property
    def token_set_id(self) -> str:
        return f"range:{self.collection_id}"


@dataclass(frozen=True)
class AttributeList:
    list_id: str
    # Key and value live in the attributes tables, not in the id
    key: Optional[str] = None
    value: Optional[str] = None

    @property
    def token_set_id(self) -> str:
        return f"list:{self.list_id}"


TokenSetRef = Union[SingleToken, ContractWide, TokenRange, AttributeList]


def parse_token_set(token_set_id: Optional[str]) -> Optional[TokenSetRef]:
    """
    Parse a tagged token-set id.

    Args:
        token_set_id: Raw id such as "token:0xabc...:1" or "contract:0xabc..."

    Returns:
        The matching variant, or None for empty ids and tags outside the four
        known schemes (e.g. dynamic sets).
    """
    if not token_set_id:
        return None

    tag, _, payload = token_set_id.partition(":")
    if not payload:
        return None

    if tag == "token":
        contract, _, token_id = payload.partition(":")
        if not contract or not token_id:
            return None
        return SingleToken(contract=contract, token_id=token_id)
    if tag == "contract":
        return ContractWide(collection_id=payload)
    if tag == "range":
        return TokenRange(collection_id=payload)
    if tag == "list":
        return AttributeList(list_id=payload)
    return None


def single_token_set_id(token: str) -> str:
    """Rewrite a "<contract>:<tokenId>" filter into its token-set id."""
    contract, _, token_id = token.lower().partition(":")
    return SingleToken(contract=contract, token_id=token_id).token_set_id
