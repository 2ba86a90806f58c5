"""Notice publisher module for pub/sub delivery of user-visible messages."""

import logging
from typing import Callable
from pubsub import pub
from ..models.notices import Notice, NoticeLevel

logger = logging.getLogger(__name__)

NOTICE_TOPIC = "voicenote.notice"

Notifier = Callable[[Notice], None]

_LOG_LEVELS = {
    NoticeLevel.INFO: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.ERROR: logging.ERROR,
}


class NoticePublisher:
    """Publishes notices using pubsub.pub so any screen can display them."""
    
    def __init__(self, topic: str = NOTICE_TOPIC):
        """Initialize notice publisher.
        
        Args:
            topic: Pub/sub topic name for notices
        """
        self.topic = topic
        logger.info(f"NoticePublisher initialized with topic: {topic}")
    
    def __call__(self, notice: Notice) -> None:
        self.publish_notice(notice)
    
    def publish_notice(self, notice: Notice) -> None:
        """Publish a notice to the pub/sub topic.
        
        Args:
            notice: Notice to publish
        """
        logger.log(_LOG_LEVELS[notice.level], f"Notice [{notice.title}]: {notice.message}")
        pub.sendMessage(self.topic, notice=notice)
