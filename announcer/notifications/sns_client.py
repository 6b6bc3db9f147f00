"""
Amazon SNS client for the fixed event-notification topic.
"""

from typing import Optional

import boto3

from announcer import config


class SnsNotifier:
    """Publishes announcements to, and subscribes email addresses on, one topic."""

    def __init__(self, client, topic_arn: str) -> None:
        self.client = client
        self.topic_arn = topic_arn

    def publish(self, subject: str, message: str) -> str:
        """
        Publish a message to every confirmed subscriber.

        Returns:
            str: The SNS MessageId.
        """
        resp = self.client.publish(TopicArn=self.topic_arn, Subject=subject, Message=message)
        return resp["MessageId"]

    def subscribe_email(self, address: str) -> str:
        """
        Register an email endpoint. SNS mails a confirmation link itself.

        Returns:
            str: The SubscriptionArn, usually "pending confirmation" until confirmed.
        """
        resp = self.client.subscribe(TopicArn=self.topic_arn, Protocol="email", Endpoint=address)
        return resp["SubscriptionArn"]


def build_notifier(topic_arn: Optional[str] = None) -> SnsNotifier:
    client = boto3.client("sns", region_name=config.AWS_REGION)
    return SnsNotifier(client, topic_arn or config.SNS_TOPIC_ARN)
