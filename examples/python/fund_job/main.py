import asyncio
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from mdp_sdk import FundJobOptions, MDPClient, PrivateKeySigner, SDKConfig
from mdp_sdk.logging_config import setup_logging

setup_logging(level=logging.DEBUG)

load_dotenv(Path(__file__).parent.parent.parent.parent / ".env")

AGENT_PRIVATE_KEY = os.getenv("AGENT_PRIVATE_KEY", "")
MDP_API_URL = os.getenv("MDP_API_URL", "http://localhost:3201")
BASE_RPC_URL = os.getenv("BASE_RPC_URL") or None
JOB_ID = os.getenv("JOB_ID", "")
PROPOSAL_ID = os.getenv("PROPOSAL_ID", "")

if not AGENT_PRIVATE_KEY or not JOB_ID or not PROPOSAL_ID:
    print("\nError: AGENT_PRIVATE_KEY, JOB_ID and PROPOSAL_ID must be set in .env file\n")
    raise SystemExit(1)


async def main():
    signer = PrivateKeySigner.from_private_key(AGENT_PRIVATE_KEY, rpc_url=BASE_RPC_URL)
    print("Initializing MDP client...")
    print(f"  API: {MDP_API_URL}")
    print(f"  Wallet: {signer.get_address()}")

    config = SDKConfig(base_url=MDP_API_URL)
    async with await MDPClient.create_authenticated(config, signer) as client:
        user = await client.auth.me()
        print(f"  Signed in as: {user.id}")

        print(f"\nFunding job {JOB_ID} (proposal {PROPOSAL_ID})")
        result = await client.payments.fund_job(
            JOB_ID,
            PROPOSAL_ID,
            signer,
            FundJobOptions(poll_interval_ms=5000, timeout_ms=180_000),
        )

        if result.success:
            print("\nEscrow funded")
        elif result.tx_hash:
            print("\nTransaction submitted but not yet confirmed; check again later")
        print(f"  Payment: {result.payment_id}")
        print(f"  Mode: {result.mode.value}")
        print(f"  Transaction: {result.tx_hash}")

        status = await client.payments.get_job_payment_status(JOB_ID)
        print(f"\nSettled total: {status.total_settled} USDC (pending: {status.has_pending})")


if __name__ == "__main__":
    asyncio.run(main())
