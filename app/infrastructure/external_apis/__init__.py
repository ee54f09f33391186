"""
External APIs integration package.

This package contains clients for external API services.
"""

from .reply_client import ReplyDispatcher
from .resend_client import MailSendError, ResendClient

__all__ = ['ReplyDispatcher', 'ResendClient', 'MailSendError']
