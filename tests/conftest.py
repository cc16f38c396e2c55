"""
Pytest configuration and shared fixtures
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mdp_sdk.types import PaymentRequirement

BASE_SEPOLIA = "eip155:84532"
# Base Sepolia USDC
SEPOLIA_USDC = "0x036cbd53842c5426634e7929541ec2318f3dcf7e"
PAYER = "0x" + "aa" * 20
ESCROW_WALLET = "0x" + "bb" * 20
FEE_WALLET = "0x" + "cc" * 20
ESCROW_CONTRACT = "0x" + "dd" * 20
AGENT_WALLET = "0x" + "ee" * 20
PAYOUT_WALLET = "0x" + "ef" * 20
SIGNATURE = "0x" + "11" * 32 + "22" * 32 + "1b"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mock_evm_private_key():
    """Test-only EVM private key"""
    return "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"


@pytest.fixture
def escrow_requirement():
    return PaymentRequirement(
        scheme="exact",
        network=BASE_SEPOLIA,
        asset=f"{BASE_SEPOLIA}/erc20:{SEPOLIA_USDC}",
        payTo=ESCROW_WALLET,
        maxAmountRequired="10000000",
        maxTimeoutSeconds=300,
        description="Escrow for job",
    )


@pytest.fixture
def fee_requirement():
    return PaymentRequirement(
        scheme="exact",
        network=BASE_SEPOLIA,
        asset=f"{BASE_SEPOLIA}/erc20:{SEPOLIA_USDC}",
        payTo=FEE_WALLET,
        maxAmountRequired="500000",
        description="Platform fee",
    )


@pytest.fixture
def contract_requirement():
    return PaymentRequirement(
        scheme="exact",
        network=BASE_SEPOLIA,
        asset=f"{BASE_SEPOLIA}/erc20:{SEPOLIA_USDC}",
        payTo=ESCROW_CONTRACT,
        maxAmountRequired="10500000",
        extra={
            "contractMode": True,
            "agentExecutorWallet": AGENT_WALLET,
            "agentPayoutWallet": PAYOUT_WALLET,
        },
    )


@pytest.fixture
def mock_signer():
    """Signer that signs typed data but cannot send transactions"""
    signer = MagicMock()
    signer.can_sign_typed_data = True
    signer.transactions = None
    signer.get_address.return_value = PAYER
    signer.sign_typed_data = AsyncMock(return_value=SIGNATURE)
    return signer


@pytest.fixture
def mock_tx_signer(mock_signer):
    """Signer with typed data and transaction support"""
    mock_signer.transactions = MagicMock()
    mock_signer.transactions.send_transaction = AsyncMock(return_value="0x" + "fa" * 32)
    return mock_signer
