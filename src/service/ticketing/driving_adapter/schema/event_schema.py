from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from src.service.ticketing.app.dto.event_projection_dto import (
    EventAnalyticsReport,
    PromoCodeInventory,
    SeatMapView,
)
from src.service.ticketing.domain.aggregate.event_ticketing_aggregate import (
    DEFAULT_CODE_TICKET_COUNT,
    DEFAULT_PAID_TICKET_COUNT,
    EventTicketingAggregate,
)
from src.service.ticketing.domain.availability_oracle import AvailabilityCheckResult
from src.service.ticketing.domain.entity.admin_hold_entity import AdminHold
from src.service.ticketing.domain.entity.event_entity import Event
from src.service.ticketing.domain.entity.promo_code_entity import PromoCode
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.entity.ticket_type_entity import TicketType
from src.service.ticketing.domain.enum.discount_type import DiscountType
from src.service.ticketing.domain.enum.seat_zone import SeatZone
from src.service.ticketing.domain.value_object.geo_location import GeoLocation
from src.service.ticketing.domain.value_object.seating_config import RowRange, SeatingConfig
from src.service.ticketing.driving_adapter.schema.common_schema import (
    CamelModel,
    UserInfoRequest,
    UserInfoResponse,
)


# ============================ Shared pieces ============================


class SeatingConfigSchema(CamelModel):
    total_rows: int = 5
    seats_per_row: int = 6
    front_row_start: int = 1
    front_row_end: int = 2
    middle_row_start: int = 3
    middle_row_end: int = 3
    back_row_start: int = 4
    back_row_end: int = 5

    def to_domain(self) -> SeatingConfig:
        return SeatingConfig(
            total_rows=self.total_rows,
            seats_per_row=self.seats_per_row,
            front_rows=RowRange(self.front_row_start, self.front_row_end),
            middle_rows=RowRange(self.middle_row_start, self.middle_row_end),
            back_rows=RowRange(self.back_row_start, self.back_row_end),
        )

    @classmethod
    def from_domain(cls, config: SeatingConfig) -> 'SeatingConfigSchema':
        return cls(
            total_rows=config.total_rows,
            seats_per_row=config.seats_per_row,
            front_row_start=config.front_rows.start,
            front_row_end=config.front_rows.end,
            middle_row_start=config.middle_rows.start,
            middle_row_end=config.middle_rows.end,
            back_row_start=config.back_rows.start,
            back_row_end=config.back_rows.end,
        )


class GeoLocationSchema(CamelModel):
    """GeoJSON point: coordinates are [longitude, latitude]."""

    type: str = 'Point'
    coordinates: List[float]

    @classmethod
    def from_domain(cls, geo: Optional[GeoLocation]) -> Optional['GeoLocationSchema']:
        return cls(coordinates=[geo.longitude, geo.latitude]) if geo else None


class TicketTypeRequest(CamelModel):
    name: str
    price: float = Field(ge=0)
    total_quantity: int = Field(ge=0)
    description: str = ''
    currency: str = 'INR'
    max_per_user: int = Field(default=10, ge=1)
    is_active: bool = True
    sale_start: Optional[datetime] = None
    sale_end: Optional[datetime] = None
    seat_type: SeatZone = SeatZone.GENERAL
    requires_promo_code: bool = False

    def to_domain(self) -> TicketType:
        return TicketType(
            name=self.name,
            price=self.price,
            total_quantity=self.total_quantity,
            description=self.description,
            currency=self.currency,
            max_per_user=self.max_per_user,
            is_active=self.is_active,
            sale_start=self.sale_start,
            sale_end=self.sale_end,
            zone=self.seat_type,
            requires_promo_code=self.requires_promo_code,
        )


class TicketTypeResponse(CamelModel):
    name: str
    description: str
    price: float
    currency: str
    total_quantity: int
    available_quantity: int
    reserved_quantity: int
    sold_quantity: int
    max_per_user: int
    is_active: bool
    sale_start: Optional[datetime]
    sale_end: Optional[datetime]
    seat_type: SeatZone
    requires_promo_code: bool

    @classmethod
    def from_domain(cls, ticket: TicketType) -> 'TicketTypeResponse':
        return cls(
            name=ticket.name,
            description=ticket.description,
            price=ticket.price,
            currency=ticket.currency,
            total_quantity=ticket.total_quantity,
            available_quantity=ticket.available_quantity,
            reserved_quantity=ticket.reserved_quantity,
            sold_quantity=ticket.sold_quantity,
            max_per_user=ticket.max_per_user,
            is_active=ticket.is_active,
            sale_start=ticket.sale_start,
            sale_end=ticket.sale_end,
            seat_type=ticket.zone,
            requires_promo_code=ticket.requires_promo_code,
        )


class PublicPromoCodeResponse(CamelModel):
    """What anyone may see of a promo code."""

    code: str
    discount_type: DiscountType
    description: str
    valid_until: Optional[datetime]
    is_used: bool

    @classmethod
    def from_domain(cls, promo: PromoCode) -> 'PublicPromoCodeResponse':
        return cls(
            code=promo.code,
            discount_type=promo.discount_type,
            description=promo.description,
            valid_until=promo.valid_until,
            is_used=promo.is_used,
        )


# ============================ Event CRUD ============================


class _EventDetailsMixin(CamelModel):
    short_description: str = ''
    description: str = ''
    category: str = ''
    tags: List[str] = []
    event_type: str = ''
    mode: str = 'offline'
    language: str = ''
    registration_deadline: Optional[datetime] = None
    address: str = ''
    pin_code: str = ''
    banner_image: Optional[str] = None
    thumbnail_image: Optional[str] = None
    gallery_images: List[str] = []
    is_featured: bool = False
    age_restriction: Optional[int] = Field(default=None, ge=0)


class EventCreateRequest(_EventDetailsMixin):
    title: str = Field(min_length=1)
    venue_name: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    country: str = Field(min_length=1)
    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)
    start_date: datetime
    end_date: datetime
    paid_ticket_count: int = Field(default=DEFAULT_PAID_TICKET_COUNT, ge=0)
    code_ticket_count: int = Field(default=DEFAULT_CODE_TICKET_COUNT, ge=0)
    paid_ticket_price: float = Field(default=0, ge=0)
    paid_ticket_seat_type: SeatZone = SeatZone.FRONT
    code_ticket_seat_type: SeatZone = SeatZone.BACK
    seating_config: SeatingConfigSchema = SeatingConfigSchema()
    # Explicit ticket types replace the paid/code defaults
    ticket_types: Optional[List[TicketTypeRequest]] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'title': 'Campus Music Night',
                'venueName': 'Main Auditorium',
                'address': '1 College Road',
                'city': 'Pune',
                'state': 'Maharashtra',
                'country': 'India',
                'longitude': 73.8567,
                'latitude': 18.5204,
                'startDate': '2026-12-01T18:00:00Z',
                'endDate': '2026-12-01T22:00:00Z',
                'paidTicketCount': 15,
                'codeTicketCount': 15,
                'paidTicketPrice': 100,
                'bannerImage': 'https://cdn.example.com/banner.jpg',
                'thumbnailImage': 'https://cdn.example.com/thumb.jpg',
            }
        }
    }

    def to_event(self) -> Event:
        return Event(
            title=self.title,
            created_by='',
            start_date=self.start_date,
            end_date=self.end_date,
            short_description=self.short_description,
            description=self.description,
            category=self.category,
            tags=list(self.tags),
            event_type=self.event_type,
            mode=self.mode,
            language=self.language,
            registration_deadline=self.registration_deadline,
            venue_name=self.venue_name,
            address=self.address,
            city=self.city,
            state=self.state,
            country=self.country,
            pin_code=self.pin_code,
            geo_location=GeoLocation(longitude=self.longitude, latitude=self.latitude),
            banner_url=self.banner_image,
            thumbnail_url=self.thumbnail_image,
            gallery_urls=list(self.gallery_images),
            is_featured=self.is_featured,
            age_restriction=self.age_restriction,
        )


class EventUpdateRequest(CamelModel):
    """Every field optional; only the ones sent are changed."""

    title: Optional[str] = Field(default=None, min_length=1)
    short_description: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    event_type: Optional[str] = None
    mode: Optional[str] = None
    language: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    venue_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    pin_code: Optional[str] = None
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    banner_image: Optional[str] = None
    thumbnail_image: Optional[str] = None
    gallery_images: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    age_restriction: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode='after')
    def check_coordinates_together(self) -> 'EventUpdateRequest':
        if (self.longitude is None) != (self.latitude is None):
            raise ValueError('longitude and latitude must be updated together')
        return self

    def to_changes(self) -> Dict[str, Any]:
        changes = self.model_dump(exclude_unset=True)
        renamed = {
            'banner_image': 'banner_url',
            'thumbnail_image': 'thumbnail_url',
            'gallery_images': 'gallery_urls',
        }
        changes = {renamed.get(key, key): value for key, value in changes.items()}
        longitude = changes.pop('longitude', None)
        latitude = changes.pop('latitude', None)
        if longitude is not None and latitude is not None:
            changes['geo_location'] = GeoLocation(longitude=longitude, latitude=latitude)
        return changes


class GeneratedPromoCodeResponse(CamelModel):
    code: str
    description: str
    valid_until: Optional[datetime]


class EventCreatedResponse(CamelModel):
    event_id: str
    title: str
    paid_tickets: int
    free_tickets: int
    generated_promo_codes: List[GeneratedPromoCodeResponse]

    @classmethod
    def from_domain(cls, aggregate: EventTicketingAggregate) -> 'EventCreatedResponse':
        paid = sum(t.total_quantity for t in aggregate.ticket_types if not t.requires_promo_code)
        free = sum(t.total_quantity for t in aggregate.ticket_types if t.requires_promo_code)
        return cls(
            event_id=aggregate.event_id,
            title=aggregate.event.title,
            paid_tickets=paid,
            free_tickets=free,
            generated_promo_codes=[
                GeneratedPromoCodeResponse(
                    code=promo.code, description=promo.description, valid_until=promo.valid_until
                )
                for promo in aggregate.promo_codes
            ],
        )


class EventResponse(CamelModel):
    id: str
    title: str
    short_description: str
    description: str
    category: str
    tags: List[str]
    event_type: str
    mode: str
    language: str
    start_date: datetime
    end_date: datetime
    registration_deadline: Optional[datetime]
    venue_name: str
    address: str
    city: str
    state: str
    country: str
    pin_code: str
    geo_location: Optional[GeoLocationSchema]
    banner_image: Optional[str]
    thumbnail_image: Optional[str]
    gallery_images: List[str]
    is_featured: bool
    age_restriction: Optional[int]
    status: str
    is_published: bool
    published_at: Optional[datetime]
    created_by: str
    updated_by: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    seating_config: SeatingConfigSchema
    ticket_types: List[TicketTypeResponse]
    is_sold_out: bool
    total_views: int
    total_bookings: int
    # Omitted from listings
    promo_codes: Optional[List[PublicPromoCodeResponse]] = None

    @classmethod
    def from_domain(
        cls, aggregate: EventTicketingAggregate, *, include_promo_codes: bool = True
    ) -> 'EventResponse':
        event = aggregate.event
        return cls(
            id=event.id,
            title=event.title,
            short_description=event.short_description,
            description=event.description,
            category=event.category,
            tags=list(event.tags),
            event_type=event.event_type,
            mode=event.mode,
            language=event.language,
            start_date=event.start_date,
            end_date=event.end_date,
            registration_deadline=event.registration_deadline,
            venue_name=event.venue_name,
            address=event.address,
            city=event.city,
            state=event.state,
            country=event.country,
            pin_code=event.pin_code,
            geo_location=GeoLocationSchema.from_domain(event.geo_location),
            banner_image=event.banner_url,
            thumbnail_image=event.thumbnail_url,
            gallery_images=list(event.gallery_urls),
            is_featured=event.is_featured,
            age_restriction=event.age_restriction,
            status=str(event.status),
            is_published=event.is_published,
            published_at=event.published_at,
            created_by=event.created_by,
            updated_by=event.updated_by,
            created_at=event.created_at,
            updated_at=event.updated_at,
            seating_config=SeatingConfigSchema.from_domain(aggregate.seating_config),
            ticket_types=[TicketTypeResponse.from_domain(t) for t in aggregate.ticket_types],
            is_sold_out=aggregate.is_sold_out,
            total_views=aggregate.analytics.total_views,
            total_bookings=aggregate.analytics.total_bookings,
            promo_codes=(
                [PublicPromoCodeResponse.from_domain(p) for p in aggregate.promo_codes]
                if include_promo_codes
                else None
            ),
        )


class EventListResponse(CamelModel):
    success: bool = True
    count: int
    total: int
    total_pages: int
    current_page: int
    data: List[EventResponse]


# ============================ Reservation flow ============================


class AvailabilityCheckRequest(CamelModel):
    ticket_type: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    promo_code: Optional[str] = None


class AvailabilityCheckResponse(CamelModel):
    can_proceed: bool
    ticket_type: str
    requested_quantity: int
    available_seats: List[str]
    seat_type: Optional[SeatZone]
    price: float
    subtotal: float
    discount: float
    total_price: float
    promo_code: Optional[str]
    reason: Optional[str]
    message: Optional[str]

    @classmethod
    def from_domain(cls, result: AvailabilityCheckResult) -> 'AvailabilityCheckResponse':
        return cls(
            can_proceed=result.can_proceed,
            ticket_type=result.ticket_type,
            requested_quantity=result.quantity,
            available_seats=list(result.projected_seats),
            seat_type=result.zone,
            price=result.unit_price,
            subtotal=result.subtotal,
            discount=result.discount,
            total_price=result.total_price,
            promo_code=result.promo_code,
            reason=str(result.reason) if result.reason else None,
            message=result.message,
        )


class ReserveTicketsRequest(CamelModel):
    ticket_type: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    promo_code: Optional[str] = None
    user_info: UserInfoRequest = UserInfoRequest()


class ReservationResponse(CamelModel):
    reservation_id: str
    event_id: str
    ticket_type: str
    quantity: int
    seat_numbers: List[str]
    seat_type: SeatZone
    subtotal: float
    discount: float
    total: float
    promo_code: Optional[str]
    payment_required: bool
    expires_at: datetime
    user_info: Optional[UserInfoResponse]

    @classmethod
    def from_domain(cls, reservation: Reservation) -> 'ReservationResponse':
        return cls(
            reservation_id=reservation.reservation_id,
            event_id=reservation.event_id,
            ticket_type=reservation.ticket_type,
            quantity=reservation.quantity,
            seat_numbers=list(reservation.seats),
            seat_type=reservation.zone,
            subtotal=reservation.subtotal,
            discount=reservation.discount,
            total=reservation.final_amount,
            promo_code=reservation.promo_code,
            payment_required=reservation.final_amount > 0,
            expires_at=reservation.expires_at,
            user_info=UserInfoResponse.from_domain(reservation.user_info),
        )


# ============================ Administration ============================


class AdminHoldRequest(CamelModel):
    seat_number: str = Field(min_length=3)
    ticket_type: str = Field(min_length=1)
    reserved_for: UserInfoRequest = UserInfoRequest()
    notes: str = ''
    promo_code_used: Optional[str] = None


class AdminHoldResponse(CamelModel):
    seat_number: str
    ticket_type: str
    reserved_for: Optional[UserInfoResponse]
    is_occupied: bool
    promo_code_used: Optional[str]
    reserved_by: str
    booking_id: Optional[str]
    notes: str
    reserved_at: Optional[datetime]

    @classmethod
    def from_domain(cls, hold: AdminHold) -> 'AdminHoldResponse':
        return cls(
            seat_number=hold.seat_number,
            ticket_type=hold.ticket_type,
            reserved_for=UserInfoResponse.from_domain(hold.reserved_for),
            is_occupied=hold.is_occupied,
            promo_code_used=hold.promo_code_used,
            reserved_by=hold.reserved_by,
            booking_id=hold.booking_id,
            notes=hold.notes,
            reserved_at=hold.reserved_at,
        )


class PromoCodeCreateRequest(CamelModel):
    code: str = Field(min_length=3, max_length=32)
    discount_type: DiscountType = DiscountType.FREE
    discount_value: float = Field(default=0, ge=0)
    max_uses: int = Field(default=1, ge=1)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    applicable_ticket_types: List[str] = []
    description: str = ''
    min_order_value: Optional[float] = Field(default=None, ge=0)


class PromoCodeResponse(CamelModel):
    code: str
    discount_type: DiscountType
    discount_value: float
    max_uses: int
    used_count: int
    is_used: bool
    is_active: bool
    valid_from: Optional[datetime]
    valid_until: Optional[datetime]
    applicable_ticket_types: List[str]
    description: str
    min_order_value: Optional[float]

    @classmethod
    def from_domain(cls, promo: PromoCode) -> 'PromoCodeResponse':
        return cls(
            code=promo.code,
            discount_type=promo.discount_type,
            discount_value=promo.discount_value,
            max_uses=promo.max_uses,
            used_count=promo.used_count,
            is_used=promo.is_used,
            is_active=promo.is_active,
            valid_from=promo.valid_from,
            valid_until=promo.valid_until,
            applicable_ticket_types=list(promo.applicable_ticket_types),
            description=promo.description,
            min_order_value=promo.min_order_value,
        )


# ============================ Projections ============================


class SeatCellResponse(CamelModel):
    seat_number: str
    row: str
    number: int
    seat_type: SeatZone
    is_reserved: bool
    is_occupied: bool
    reserved_for: Optional[UserInfoResponse]
    promo_code_used: Optional[str]


class SeatMapRowResponse(CamelModel):
    row: str
    seats: List[SeatCellResponse]


class TicketAvailabilityResponse(CamelModel):
    name: str
    seat_type: SeatZone
    price: float
    total_quantity: int
    sold_quantity: int
    reserved_quantity: int
    available_quantity: int
    requires_promo_code: bool


class PromoCodeStatsResponse(CamelModel):
    total: int
    used: int
    available: int


class SeatMapResponse(CamelModel):
    event_id: str
    event_title: str
    venue_name: str
    seat_map: List[SeatMapRowResponse]
    ticket_availability: List[TicketAvailabilityResponse]
    promo_code_stats: PromoCodeStatsResponse
    total_seats: int
    available_seats: int
    booked_seats: int

    @classmethod
    def from_view(cls, view: SeatMapView) -> 'SeatMapResponse':
        return cls(
            event_id=view.event_id,
            event_title=view.event_title,
            venue_name=view.venue_name,
            seat_map=[
                SeatMapRowResponse(
                    row=row.row,
                    seats=[
                        SeatCellResponse(
                            seat_number=cell.seat_number,
                            row=cell.row,
                            number=cell.number,
                            seat_type=cell.zone,
                            is_reserved=cell.is_reserved,
                            is_occupied=cell.is_occupied,
                            reserved_for=UserInfoResponse.from_domain(cell.reserved_for),
                            promo_code_used=cell.promo_code_used,
                        )
                        for cell in row.seats
                    ],
                )
                for row in view.rows
            ],
            ticket_availability=[
                TicketAvailabilityResponse(
                    name=ticket.name,
                    seat_type=ticket.zone,
                    price=ticket.price,
                    total_quantity=ticket.total_quantity,
                    sold_quantity=ticket.sold_quantity,
                    reserved_quantity=ticket.reserved_quantity,
                    available_quantity=ticket.available_quantity,
                    requires_promo_code=ticket.requires_promo_code,
                )
                for ticket in view.ticket_availability
            ],
            promo_code_stats=PromoCodeStatsResponse(
                total=view.promo_code_stats.total,
                used=view.promo_code_stats.used,
                available=view.promo_code_stats.available,
            ),
            total_seats=view.total_seats,
            available_seats=view.available_seats,
            booked_seats=view.booked_seats,
        )


class AvailablePromoCodeResponse(CamelModel):
    code: str
    description: str
    valid_until: Optional[datetime]
    seat_type: Optional[SeatZone]


class UsedPromoCodeResponse(CamelModel):
    code: str
    used_by: Optional[UserInfoResponse]
    used_at: Optional[datetime]
    seat_number: Optional[str]


class PromoCodeInventoryResponse(CamelModel):
    total_generated: int
    available: int
    used: int
    available_codes: List[AvailablePromoCodeResponse]
    used_codes: List[UsedPromoCodeResponse]

    @classmethod
    def from_inventory(cls, inventory: PromoCodeInventory) -> 'PromoCodeInventoryResponse':
        return cls(
            total_generated=inventory.total_generated,
            available=inventory.available,
            used=inventory.used,
            available_codes=[
                AvailablePromoCodeResponse(
                    code=promo.code,
                    description=promo.description,
                    valid_until=promo.valid_until,
                    seat_type=promo.zone,
                )
                for promo in inventory.available_codes
            ],
            used_codes=[
                UsedPromoCodeResponse(
                    code=promo.code,
                    used_by=UserInfoResponse.from_domain(promo.used_by),
                    used_at=promo.used_at,
                    seat_number=promo.seat_number,
                )
                for promo in inventory.used_codes
            ],
        )


class AnalyticsOverviewResponse(CamelModel):
    total_views: int
    total_bookings: int
    total_revenue: float
    conversion_rate: float


class TicketAnalyticsResponse(CamelModel):
    name: str
    seat_type: SeatZone
    total_quantity: int
    sold_quantity: int
    reserved_quantity: int
    available_quantity: int
    sold_percentage: float
    revenue: float
    requires_promo_code: bool


class SeatOccupancyResponse(CamelModel):
    total_seats: int
    reserved_seats: int
    occupied_seats: int
    available_seats: int


class PromoCodeAnalyticsResponse(CamelModel):
    total_promo_codes: int
    used_promo_codes: int
    available_promo_codes: int
    usage_rate: float


class BookingStatsResponse(CamelModel):
    total_bookings: int
    paid_bookings: int
    free_bookings: int
    checked_in: int
    cancelled: int


class EventAnalyticsResponse(CamelModel):
    event_id: str
    title: str
    overview: AnalyticsOverviewResponse
    ticket_analytics: List[TicketAnalyticsResponse]
    seat_occupancy: SeatOccupancyResponse
    promo_code_analytics: PromoCodeAnalyticsResponse
    booking_stats: BookingStatsResponse
    revenue_by_ticket_type: Dict[str, float]

    @classmethod
    def from_report(cls, report: EventAnalyticsReport) -> 'EventAnalyticsResponse':
        return cls(
            event_id=report.event_id,
            title=report.title,
            overview=AnalyticsOverviewResponse(
                total_views=report.overview.total_views,
                total_bookings=report.overview.total_bookings,
                total_revenue=report.overview.total_revenue,
                conversion_rate=report.overview.conversion_rate,
            ),
            ticket_analytics=[
                TicketAnalyticsResponse(
                    name=ticket.name,
                    seat_type=ticket.zone,
                    total_quantity=ticket.total_quantity,
                    sold_quantity=ticket.sold_quantity,
                    reserved_quantity=ticket.reserved_quantity,
                    available_quantity=ticket.available_quantity,
                    sold_percentage=ticket.sold_percentage,
                    revenue=ticket.revenue,
                    requires_promo_code=ticket.requires_promo_code,
                )
                for ticket in report.ticket_analytics
            ],
            seat_occupancy=SeatOccupancyResponse(
                total_seats=report.seat_occupancy.total_seats,
                reserved_seats=report.seat_occupancy.reserved_seats,
                occupied_seats=report.seat_occupancy.occupied_seats,
                available_seats=report.seat_occupancy.available_seats,
            ),
            promo_code_analytics=PromoCodeAnalyticsResponse(
                total_promo_codes=report.promo_code_analytics.total_promo_codes,
                used_promo_codes=report.promo_code_analytics.used_promo_codes,
                available_promo_codes=report.promo_code_analytics.available_promo_codes,
                usage_rate=report.promo_code_analytics.usage_rate,
            ),
            booking_stats=BookingStatsResponse(
                total_bookings=report.booking_stats.total_bookings,
                paid_bookings=report.booking_stats.paid_bookings,
                free_bookings=report.booking_stats.free_bookings,
                checked_in=report.booking_stats.checked_in,
                cancelled=report.booking_stats.cancelled,
            ),
            revenue_by_ticket_type=dict(report.revenue_by_ticket_type),
        )
