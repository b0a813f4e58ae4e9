"""Notification sender that writes the message to the log instead of an email / SMS gateway."""

from typing import List

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_notification_sender import INotificationSender
from src.service.ticketing.domain.entity.booking_entity import Booking


class LoggingNotificationSender(INotificationSender):
    def __init__(self) -> None:
        self.sent_messages: List[dict] = []  # kept for inspection in tests

    async def _send(self, *, to: str, subject: str, body: str) -> None:
        message = {'to': to, 'subject': subject, 'body': body}
        self.sent_messages.append(message)
        Logger.base.info(f'📧 [NOTIFY] To: {to or "<no contact>"} | {subject}')

    @Logger.io
    async def send_booking_confirmation(self, *, booking: Booking, event_title: str) -> None:
        seats = ', '.join(booking.seat_numbers) or '-'
        body = (
            f'Hi {booking.user_info.name or "there"},\n\n'
            f'Your booking {booking.booking_id} for "{event_title}" is confirmed.\n'
            f'Seats: {seats}\n'
            f'Amount: {booking.total:.2f}\n'
            f'Payment: {booking.payment_method} ({booking.payment_status})'
        )
        await self._send(
            to=booking.user_info.email or booking.user_info.phone,
            subject=f'Booking Confirmed - {booking.booking_id}',
            body=body,
        )

    @Logger.io
    async def send_booking_cancellation(self, *, booking: Booking, event_title: str) -> None:
        body = (
            f'Hi {booking.user_info.name or "there"},\n\n'
            f'Your booking {booking.booking_id} for "{event_title}" has been cancelled.\n'
            f'Reason: {booking.cancellation_reason or "not given"}'
        )
        await self._send(
            to=booking.user_info.email or booking.user_info.phone,
            subject=f'Booking Cancelled - {booking.booking_id}',
            body=body,
        )
