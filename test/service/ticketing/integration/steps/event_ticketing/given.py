from typing import Any

from fastapi.testclient import TestClient
from pytest_bdd import given, parsers
from pytest_bdd.model import Step

from src.platform.constant.route_constant import EVENT_PROMO_CODES
from test.shared.utils import (
    assert_response_status,
    auth_headers,
    create_event,
    extract_table_data,
    extract_table_rows,
)
from test.util_constant import ORGANIZER_USER


def _row_range(value: str) -> tuple[int, int]:
    """'1-3' -> (1, 3)."""
    start, end = value.split('-')
    return int(start), int(end)


def _seating_config(row_data: dict[str, str]) -> dict[str, int]:
    seating: dict[str, int] = {'totalRows': 5, 'seatsPerRow': 6}
    for zone in ('front', 'middle', 'back'):
        key = f'{zone}Rows'
        if key in row_data:
            start, end = _row_range(row_data[key])
            seating[f'{zone}RowStart'] = start
            seating[f'{zone}RowEnd'] = end
    return seating


@given('the organizer created an event with:')
def organizer_created_event(step: Step, client: TestClient, event_state: dict[str, Any]) -> None:
    row_data = extract_table_data(step)
    overrides: dict[str, Any] = {
        'paidTicketCount': int(row_data['paidTicketCount']),
        'paidTicketPrice': float(row_data['paidTicketPrice']),
        'codeTicketCount': int(row_data['codeTicketCount']),
        'seatingConfig': _seating_config(row_data),
    }
    if 'codeTicketSeatType' in row_data:
        overrides['codeTicketSeatType'] = row_data['codeTicketSeatType']

    created = create_event(client, ORGANIZER_USER, **overrides)
    event_state['event_id'] = created['eventId']
    event_state['created'] = created


@given('the organizer created an event with ticket types:')
def organizer_created_event_with_ticket_types(
    step: Step, client: TestClient, event_state: dict[str, Any]
) -> None:
    ticket_types = [
        {
            'name': row['name'],
            'price': float(row['price']),
            'totalQuantity': int(row['totalQuantity']),
            'seatType': row['seatType'],
        }
        for row in extract_table_rows(step)
    ]
    created = create_event(client, ORGANIZER_USER, ticketTypes=ticket_types)
    event_state['event_id'] = created['eventId']
    event_state['created'] = created


@given(parsers.parse('the organizer added promo codes "{codes}"'))
def organizer_added_promo_codes(
    client: TestClient, event_state: dict[str, Any], codes: str
) -> None:
    for code in [c.strip() for c in codes.split(',')]:
        response = client.post(
            EVENT_PROMO_CODES.format(event_id=event_state['event_id']),
            json={'code': code, 'discountType': 'free', 'description': 'Guest list'},
            headers=auth_headers(ORGANIZER_USER),
        )
        assert_response_status(response, 201)
