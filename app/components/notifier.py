"""Notification component"""
import streamlit as st

from services.data_model import NotificationLevel
from services.session import SessionContext


class Notifier:
    """Shows the notifications queued by the task handlers"""

    @staticmethod
    def render_pending(ctx: SessionContext) -> None:
        for notification in ctx.pop_notifications():
            if notification.level == NotificationLevel.MESSAGE:
                st.toast(notification.text, icon="✅")
            elif notification.level == NotificationLevel.WARNING:
                st.warning(notification.text, icon="⚠️")
            else:
                st.error(notification.text, icon="❌")
