"""
Smart-contract generation service.

Provides:
- Prompt templates for token, NFT, voting and custom Solidity contracts
- An HTTP handler (FastAPI) that forwards prompts to the Anthropic Messages API
- Command-line helpers to generate a contract or launch the server
"""
