"""
Auth Gate

Wraps a producer so it only yields for a signed-in user. Signed out, the
gated producer completes with nothing, exactly like an empty fetch.
"""

import logging
from typing import Iterator

from core.media_service import Producer, SignInManager

logger = logging.getLogger("AuthGate")


def gate(producer: Producer, requires_auth: bool, sign_in_manager: SignInManager) -> Producer:
    if not requires_auth:
        return producer

    def gated() -> Iterator:
        for is_signed in sign_in_manager.is_signed_observe()():
            if is_signed:
                yield from producer()
            else:
                logger.info("Not signed in, skipping auth-only fetch")

    return gated
