"""Spending approvals for the router.

The zapper approves the router for the maximum amount the first time an
allowance falls short, so repeated zaps through the same token skip the
approval. The router is trusted with unlimited future pulls from the
zapper's custody account; the zapper only holds funds for the duration of
a single zap.
"""

import structlog

from zapper.amm.interfaces import Token
from zapper.constants import UINT256_MAX

logger = structlog.get_logger()


class AllowanceManager:
    """Grants allowances from the zapper's custody account.

    Args:
        owner: Custody account whose tokens the spender may pull
    """

    def __init__(self, owner: str) -> None:
        self.owner = owner

    def ensure_allowance(self, token: Token, spender: str, required_amount: int) -> bool:
        """Approve spender for the maximum amount if the current allowance is short.

        Returns:
            True if an approval was issued
        """
        current = token.allowance(self.owner, spender)
        if current >= required_amount:
            logger.debug(
                "allowance_sufficient",
                token=token.address,
                spender=spender,
                current=current,
                required=required_amount,
            )
            return False

        token.approve(self.owner, spender, UINT256_MAX)
        logger.debug("allowance_granted", token=token.address, spender=spender)
        return True
