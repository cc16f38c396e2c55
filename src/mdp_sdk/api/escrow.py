"""
EscrowAPI - on-chain escrow state
"""

from mdp_sdk.http import HttpTransport
from mdp_sdk.types import EscrowState


class EscrowAPI:
    def __init__(self, http: HttpTransport) -> None:
        self._http = http

    async def get(self, job_id: str) -> EscrowState:
        """Escrow contract address, escrow data and computed deadlines for a job"""
        data = await self._http.get(f"/api/escrow/{job_id}")
        return EscrowState(**data)
