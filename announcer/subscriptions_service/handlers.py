"""
Subscription handler: register an email address on the notification topic.
"""

import logging
import re
from typing import Any, Dict, Tuple

from announcer.errors import DependencyError, ValidationError
from announcer.gateway.context import ApiRequest, HandlerContext

# local@domain.tld shape only, not full RFC 5322
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email) is not None


def subscribe_user(ctx: HandlerContext, req: ApiRequest) -> Tuple[Dict[str, Any], int]:
    """
    Subscribe an email address to event notifications.

    SNS sends the confirmation email; the subscription stays pending until
    the recipient follows the link.

    Returns:
        200: { "message": str, "subscriptionArn": str }

    Raises:
        ValidationError: The email is missing or malformed.
        DependencyError: The notification service call failed.
    """
    email = req.body.get("email")
    if not email or not is_valid_email(email):
        raise ValidationError("Invalid email address provided")

    try:
        subscription_arn = ctx.notifier.subscribe_email(email)
    except Exception as e:
        raise DependencyError("Failed to subscribe user", e) from e

    logging.info(f"[Subscribe] Subscription requested: {subscription_arn}")

    return {
        "message": "Subscription pending. Please check your email to confirm subscription.",
        "subscriptionArn": subscription_arn,
    }, 200
