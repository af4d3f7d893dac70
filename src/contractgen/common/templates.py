"""Prompt templating helpers."""
from __future__ import annotations
from typing import Any, Callable, Mapping

from contractgen.common.schema import ContractType

SOLIDITY_VERSION = "^0.8.20"
LICENSE_HEADER = "// SPDX-License-Identifier: MIT"
FENCE = "```"
RETURN_INSTRUCTION = (
    "Return ONLY the Solidity code, no explanations before or after. "
    f"Start with {LICENSE_HEADER}"
)

PromptTemplate = Callable[[Mapping[str, Any]], str]


def _value(params: Mapping[str, Any], key: str) -> str:
    return str(params.get(key))


def token_prompt(params: Mapping[str, Any]) -> str:
    return f"""Generate a complete, production-ready ERC-20 token smart contract with the following specifications:
- Token Name: {_value(params, "name")}
- Symbol: {_value(params, "symbol")}
- Total Supply: {_value(params, "supply")}
- Use Solidity version {SOLIDITY_VERSION}
- Include standard ERC-20 functions (transfer, approve, transferFrom, balanceOf, allowance)
- Add proper events (Transfer, Approval)
- Make it secure and follow best practices
- Include detailed comments

{RETURN_INSTRUCTION}"""


def nft_prompt(params: Mapping[str, Any]) -> str:
    return f"""Generate a complete, production-ready ERC-721 NFT smart contract with the following specifications:
- Collection Name: {_value(params, "name")}
- Symbol: {_value(params, "symbol")}
- Use Solidity version {SOLIDITY_VERSION}
- Include standard ERC-721 functions (mint, transfer, approve, etc.)
- Add proper events
- Include a simple mint function
- Make it secure and follow best practices
- Include detailed comments

{RETURN_INSTRUCTION}"""


def voting_prompt(params: Mapping[str, Any]) -> str:
    return f"""Generate a complete, production-ready voting/governance smart contract with the following specifications:
- System Name: {_value(params, "name")}
- Use Solidity version {SOLIDITY_VERSION}
- Allow creating proposals
- Allow voting on proposals
- Track vote counts
- Prevent double voting
- Include owner controls
- Make it secure and follow best practices
- Include detailed comments

{RETURN_INSTRUCTION}"""


def custom_prompt(params: Mapping[str, Any]) -> str:
    return f"""Generate a complete, production-ready smart contract based on this description:
{_value(params, "description")}

Requirements:
- Use Solidity version {SOLIDITY_VERSION}
- Follow security best practices
- Include detailed comments explaining the code
- Make it functional and deployable
- Include appropriate access controls

{RETURN_INSTRUCTION}"""


TEMPLATES: dict[ContractType, PromptTemplate] = {
    ContractType.TOKEN: token_prompt,
    ContractType.NFT: nft_prompt,
    ContractType.VOTING: voting_prompt,
    ContractType.CUSTOM: custom_prompt,
}

REQUIRED_FIELDS: dict[ContractType, tuple[str, ...]] = {
    ContractType.TOKEN: ("name", "symbol", "supply"),
    ContractType.NFT: ("name", "symbol"),
    ContractType.VOTING: ("name",),
    ContractType.CUSTOM: ("description",),
}


def missing_fields(contract_type: ContractType, params: Mapping[str, Any]) -> list[str]:
    """Return the template fields of ``contract_type`` absent from ``params``."""
    return [key for key in REQUIRED_FIELDS[contract_type] if params.get(key) is None]


def render_prompt(contract_type: ContractType, params: Mapping[str, Any]) -> str:
    """
    Render contract parameters into the template for its type.

    Args:
        contract_type: Template selector.
        params: Field values, interpolated verbatim.

    Returns:
        Rendered prompt.
    """
    return TEMPLATES[contract_type](params)


def strip_code_fences(text: str) -> str:
    """
    Remove a single markdown code fence wrapping model output.

    Handles ```solidity and bare ``` fences; text without a leading fence is
    only trimmed. A trailing fence is removed only when a leading one was.
    """
    clean = text.strip()
    if not clean.startswith(FENCE):
        return clean
    opener = f"{FENCE}solidity\n" if clean.startswith(f"{FENCE}solidity") else f"{FENCE}\n"
    if clean.startswith(opener):
        clean = clean[len(opener):]
    if clean.endswith(f"\n{FENCE}"):
        clean = clean[: -len(FENCE) - 1]
    return clean.strip()
