"""notary.notarization

Ownership is proven, then recorded.

Protocol:
- issue a challenge: ``{address}:{issued_at}:{purpose_tag}``
- the wallet signs it elsewhere
- submit address, challenge, signature and record
- freshness, then signature, then the append

No session state between the two phases. The challenge carries its own issue time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from notary import PURPOSE_TAG
from notary.core.block import Block, SealedBlock
from notary.core.chain import Chain
from notary.core.config import Config
from notary.core.exceptions import AppendError, SubmitError, SubmitErrorKind
from notary.core.records import build_record
from notary.core.time import Clock, minutes_to_seconds, now_seconds
from notary.security.signatures import SignatureVerifier, build_verifier

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = minutes_to_seconds(5)


class OwnershipNotary:
    """Challenge-response front door of a :class:`~notary.core.chain.Chain`."""

    def __init__(
        self,
        chain: Chain,
        verifier: SignatureVerifier,
        *,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        purpose_tag: str = PURPOSE_TAG,
        clock: Clock = now_seconds,
    ) -> None:
        self.chain = chain
        self.verifier = verifier
        self.window_seconds = int(window_seconds)
        self.purpose_tag = purpose_tag
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        chain: Chain,
        config: Config,
        *,
        verifier: SignatureVerifier | None = None,
        clock: Clock = now_seconds,
    ) -> OwnershipNotary:
        return cls(
            chain,
            verifier or build_verifier(config.notary.signature_scheme),
            window_seconds=config.notary.challenge_window_seconds,
            purpose_tag=config.notary.purpose_tag,
            clock=clock,
        )

    def issue_challenge(self, address: str) -> str:
        """Return the message the wallet must sign.

        Raises:
            ValueError: empty address, or one containing ``:``.
        """

        if not address or ":" in address:
            raise ValueError("address must be non-empty and must not contain ':'")
        challenge = f"{address}:{self._clock()}:{self.purpose_tag}"
        logger.info("challenge_issued", extra={"address": address})
        return challenge

    def parse_challenge(self, challenge: str) -> tuple[str, int]:
        """Split a challenge into ``(address, issued_at)``.

        Raises:
            SubmitError: ``MALFORMED_CHALLENGE`` when the shape is not recognized.
        """

        parts = challenge.split(":") if isinstance(challenge, str) else []
        well_formed = (
            len(parts) == 3
            and bool(parts[0])
            and parts[1].isascii()
            and parts[1].isdigit()
            and parts[2] == self.purpose_tag
        )
        if not well_formed:
            raise self._reject(SubmitErrorKind.MALFORMED_CHALLENGE, "challenge shape not recognized")
        return parts[0], int(parts[1])

    def submit(
        self,
        address: str,
        challenge: str,
        signature: str,
        record: Mapping[str, Any],
    ) -> SealedBlock:
        """Notarize ``record`` for ``address``.

        Raises:
            SubmitError: with ``kind`` set to the first check that failed.
        """

        issued_for, issued_at = self.parse_challenge(challenge)
        if issued_for != address:
            raise self._reject(SubmitErrorKind.MALFORMED_CHALLENGE, "challenge was issued for another address")

        elapsed = self._clock() - issued_at
        if elapsed < 0:
            raise self._reject(SubmitErrorKind.MALFORMED_CHALLENGE, "challenge issue time is in the future")
        if elapsed > self.window_seconds:
            raise self._reject(
                SubmitErrorKind.EXPIRED,
                f"{elapsed}s elapsed since the challenge was issued; limit is {self.window_seconds}s",
            )

        try:
            authentic = self.verifier.verify(challenge, address, signature)
        except Exception as e:
            raise self._reject(SubmitErrorKind.VERIFIER_FAILED, f"signature verifier raised {e!r}") from e
        if not authentic:
            raise self._reject(SubmitErrorKind.BAD_SIGNATURE, "signature does not match address")

        try:
            candidate = Block.for_record(build_record(address, record))
        except (ValidationError, TypeError, ValueError) as e:
            raise self._reject(SubmitErrorKind.MALFORMED_RECORD, f"record is not a star claim: {e}") from e

        try:
            block = self.chain.append(candidate)
        except AppendError as e:
            raise self._reject(SubmitErrorKind.CHAIN_REJECTED, str(e)) from e

        logger.info("star_notarized", extra={"address": address, "height": block.height})
        return block

    def _reject(self, kind: SubmitErrorKind, message: str) -> SubmitError:
        logger.info("submit_rejected", extra={"kind": str(kind), "reason": message})
        return SubmitError(kind, message)
