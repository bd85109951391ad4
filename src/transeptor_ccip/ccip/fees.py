"""Fee quoting and settlement for CCIP sends."""

from __future__ import annotations

import logging

from ..chain.base import ChainClient
from ..config import NetworkConfig
from ..exceptions import (
    AuthorizationError,
    ConfigurationError,
    InsufficientFundsError,
)
from ..types import CrossChainMessage, FeeQuote, FeeSettlement, PayFeesIn
from ..utils import same_address

logger = logging.getLogger(__name__)


def quote_fee(
    client: ChainClient, router: str, chain_selector: int, message: CrossChainMessage
) -> FeeQuote:
    """Ask the router what delivering ``message`` costs; errors propagate."""
    amount = client.get_fee(router, chain_selector, message)
    pay_fees_in = PayFeesIn.NATIVE if message.pays_in_native else PayFeesIn.LINK
    logger.info(
        "Router %s quoted %s %s for selector %s", router, amount, pay_fees_in.unit, chain_selector
    )
    return FeeQuote(amount=int(amount), pay_fees_in=pay_fees_in, fee_token=message.fee_token)


def ensure_balance(available: int, quote: FeeQuote, *, holder: str, currency: str) -> None:
    if available < quote.amount:
        raise InsufficientFundsError(
            f"{holder} does not have enough {currency} balance to pay for the CCIP fees "
            f"(required {quote.amount} {quote.unit}, available {available})",
            required=quote.amount,
            available=available,
            details={"holder": holder},
        )


def settle_fee(
    client: ChainClient, network: NetworkConfig, router: str, quote: FeeQuote
) -> FeeSettlement:
    """Make ``quote`` spendable by the router.

    Token fees: allow-list check, signer balance check, then an approval of
    exactly ``quote.amount`` that is mined before returning. Native fees:
    balance check only; the quote travels as the send's value.
    """
    signer = client.address

    if quote.pay_fees_in is PayFeesIn.NATIVE:
        ensure_balance(client.native_balance(signer), quote, holder=signer, currency="native")
        return FeeSettlement(quote=quote, value=quote.amount)

    if not network.supports_fee_token(quote.fee_token):
        raise ConfigurationError(
            f"Token address {quote.fee_token} not in the list of supported fee tokens "
            f"{list(network.fee_tokens)}",
            field="fee_token",
            value=quote.fee_token,
        )

    ensure_balance(
        client.token_balance(quote.fee_token, signer), quote, holder=signer, currency="LINK"
    )

    logger.info(
        "Approving router %s to spend %s of %s on behalf of %s",
        router,
        quote.amount,
        quote.fee_token,
        signer,
    )
    approval = client.approve(quote.fee_token, router, quote.amount)
    return FeeSettlement(quote=quote, value=0, approval=approval)


def check_account_transfer(
    client: ChainClient,
    *,
    account: str,
    chain_selector: int,
    token: str,
) -> None:
    """Checks made before quoting a smart-account token transfer."""

    owner = client.owner_of(account)
    if not same_address(owner, client.address):
        raise AuthorizationError(
            f"The signer {client.address} is not the owner of the TranseptorAccount {account}",
            address=client.address,
            owner=owner,
        )

    supported = client.account_supported_tokens(account, chain_selector)
    if not any(same_address(candidate, token) for candidate in supported):
        raise ConfigurationError(
            f"The token {token} is not supported for chain selector {chain_selector}",
            field="token_address",
            value=token,
            details={"supported_tokens": list(supported)},
        )


def ensure_account_can_pay(
    client: ChainClient, network: NetworkConfig, account: str, quote: FeeQuote
) -> None:
    """The smart account itself pays account-level transfer fees."""

    if quote.pay_fees_in is PayFeesIn.LINK:
        available = client.token_balance(network.link_token, account)
        currency = "LINK"
    else:
        available = client.native_balance(account)
        currency = "native"
    ensure_balance(
        available, quote, holder=f"The TranseptorAccount {account}", currency=currency
    )
