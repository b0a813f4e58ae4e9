from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    EVENT_BASE,
    EVENT_CONFIRM_BOOKING,
    EVENT_PUBLISH,
    EVENT_RESERVE,
)
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.util_constant import EVENT_END, EVENT_START


class FrozenClock:
    """Injectable clock that only moves when a test says so."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def extract_table_data(step) -> Dict[str, Any]:
    rows = step.data_table.rows
    headers = [cell.value for cell in rows[0].cells]
    values = [cell.value for cell in rows[1].cells]
    return dict(zip(headers, values, strict=True))


def extract_table_rows(step) -> list[Dict[str, str]]:
    rows = step.data_table.rows
    headers = [cell.value for cell in rows[0].cells]
    return [
        dict(zip(headers, [cell.value for cell in row.cells], strict=True)) for row in rows[1:]
    ]


def extract_single_value(step, row_index: int = 0, col_index: int = 0) -> str:
    return step.data_table.rows[row_index].cells[col_index].value


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def auth_headers(user: UserEntity) -> Dict[str, str]:
    token = JwtAuth(settings).create_jwt_token(user)
    return {'Authorization': f'Bearer {token}'}


def build_event_request_data(**overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        'title': 'Jazz Night',
        'description': 'An evening of live jazz',
        'venueName': 'Blue Note Hall',
        'city': 'Mumbai',
        'state': 'Maharashtra',
        'country': 'India',
        'longitude': 72.8777,
        'latitude': 19.076,
        'startDate': EVENT_START,
        'endDate': EVENT_END,
        'category': 'music',
        'eventType': 'concert',
        'bannerImage': 'https://cdn.test/banner.png',
        'thumbnailImage': 'https://cdn.test/thumb.png',
        'paidTicketCount': 15,
        'paidTicketPrice': 500,
        'codeTicketCount': 15,
    }
    data.update(overrides)
    return data


def create_event(client: TestClient, user: UserEntity, **overrides: Any) -> Dict[str, Any]:
    response = client.post(
        EVENT_BASE, json=build_event_request_data(**overrides), headers=auth_headers(user)
    )
    assert_response_status(response, 201)
    return response.json()['data']


def publish_event(client: TestClient, user: UserEntity, event_id: str) -> Dict[str, Any]:
    response = client.put(EVENT_PUBLISH.format(event_id=event_id), headers=auth_headers(user))
    assert_response_status(response, 200)
    return response.json()['data']


def reserve_tickets(
    client: TestClient,
    event_id: str,
    *,
    ticket_type: str,
    quantity: int = 1,
    promo_code: Optional[str] = None,
    user_info: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
):
    body: Dict[str, Any] = {'ticketType': ticket_type, 'quantity': quantity}
    if promo_code is not None:
        body['promoCode'] = promo_code
    if user_info is not None:
        body['userInfo'] = user_info
    return client.post(EVENT_RESERVE.format(event_id=event_id), json=body, headers=headers)


def confirm_booking(
    client: TestClient,
    event_id: str,
    reservation: Dict[str, Any],
    *,
    payment_method: str = 'upi',
    payment_status: str = 'completed',
):
    return client.post(
        EVENT_CONFIRM_BOOKING.format(event_id=event_id),
        json={
            'reservationData': {
                'reservationId': reservation['reservationId'],
                'expiresAt': reservation['expiresAt'],
            },
            'paymentMethod': payment_method,
            'paymentStatus': payment_status,
            'paymentId': 'pay_test_1',
        },
    )
