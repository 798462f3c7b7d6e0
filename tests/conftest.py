"""Pytest configuration and fixtures."""

import json

import pytest

from vibeaudit.analyzers import ContractInfo

# Sample Solidity code for testing
SAMPLE_SOLIDITY_CLEAN = '''// SPDX-License-Identifier: MIT
pragma solidity 0.8.20;

/// @title Simple Storage
/// @notice Stores a single number
contract SimpleStorage {
    uint256 private value;

    function set(uint256 newValue) external {
        value = newValue;
    }
}
'''

SAMPLE_SOLIDITY_VAULT = '''// SPDX-License-Identifier: MIT
pragma solidity ^0.8.0;

contract Vault {
    mapping(address => uint256) public balances;

    function withdraw(uint256 amount) external {
        require(balances[msg.sender] >= amount);
        msg.sender.call{value: amount}("");
        balances[msg.sender] -= amount;
    }
}
'''

SAMPLE_SOLIDITY_GUARDED_VAULT = '''// SPDX-License-Identifier: MIT
pragma solidity 0.8.20;

contract GuardedVault is ReentrancyGuard {
    mapping(address => uint256) public balances;

    function withdraw(uint256 amount) external nonReentrant {
        balances[msg.sender] -= amount;
        (bool success, ) = msg.sender.call{value: amount}("");
        require(success, "transfer failed");
    }
}
'''

SAMPLE_SOLIDITY_LOTTERY = '''pragma solidity >=0.7.0;

contract Lottery {
    address public owner;

    function pick() external view returns (uint256) {
        require(tx.origin == owner);
        return uint256(keccak256(abi.encode(block.prevrandao, block.timestamp)));
    }

    function close() external {
        selfdestruct(payable(owner));
    }
}
'''

SAMPLE_SOLIDITY_ROUTER_TOKEN = '''pragma solidity 0.8.20;

// ERC20 token with a built-in router helper
contract RouterToken {
    function swapExactTokens(address router) external {}
}
'''

BUNDLE_FILES = {
    "contracts/Token.sol": "pragma solidity ^0.8.0;\n\n/// @title Bundle Token\ncontract Token {}",
    "contracts/Timelock.sol": "contract Timelock {\n    uint256 at = block.timestamp;\n}",
}


def make_bundle(files: dict[str, str]) -> str:
    """Wrap files the way Etherscan wraps standard-JSON verified sources."""
    inner = json.dumps(
        {
            "language": "Solidity",
            "sources": {path: {"content": content} for path, content in files.items()},
        }
    )
    return "{" + inner + "}"


def make_contract_info(**overrides) -> ContractInfo:
    fields = {
        "address": "0x" + "ab" * 20,
        "is_contract": True,
        "bytecode": "0x6080604052",
        "is_verified": True,
        "source_code": SAMPLE_SOLIDITY_CLEAN,
        "contract_name": "SimpleStorage",
    }
    fields.update(overrides)
    return ContractInfo(**fields)


@pytest.fixture
def sample_solidity_clean():
    """Pinned contract with no risky patterns."""
    return SAMPLE_SOLIDITY_CLEAN


@pytest.fixture
def sample_solidity_vault():
    """Unguarded low-level value transfer."""
    return SAMPLE_SOLIDITY_VAULT


@pytest.fixture
def sample_solidity_guarded_vault():
    """Value transfer behind nonReentrant with checked success."""
    return SAMPLE_SOLIDITY_GUARDED_VAULT


@pytest.fixture
def sample_solidity_lottery():
    """Several independent risky patterns."""
    return SAMPLE_SOLIDITY_LOTTERY


@pytest.fixture
def sample_solidity_router_token():
    """Matches both the router and the ERC20 keywords."""
    return SAMPLE_SOLIDITY_ROUTER_TOKEN


@pytest.fixture
def bundle_files():
    """Files inside the sample bundle, in bundle order."""
    return dict(BUNDLE_FILES)


@pytest.fixture
def sample_bundle():
    """Multi-file verification bundle."""
    return make_bundle(BUNDLE_FILES)


@pytest.fixture
def contract_info_factory():
    """Build ContractInfo records with overridable fields."""
    return make_contract_info
