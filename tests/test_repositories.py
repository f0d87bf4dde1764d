from datetime import datetime
from decimal import Decimal

from psycopg2 import extras

from models.flight import Flight
from repositories import attraction_repo, flight_repo, location_repo, stats_repo
from repositories.attraction_repo import AttractionRepository
from repositories.flight_repo import FlightRepository
from repositories.location_repo import LocationRepository
from repositories.stats_repo import StatsRepository


def test_flights_by_route_uses_stored_function(fake_db):
    conn = fake_db(
        flight_repo,
        results=[[
            {"id": 3, "flight_name": "Emirates 201", "departure_time": datetime(2025, 1, 15, 10),
             "arrival_time": datetime(2025, 1, 16, 8), "duration": "13h 00m",
             "fare": Decimal("1299.99"), "stops": 0},
            {"id": 7, "flight_name": "Etihad 100", "departure_time": None, "arrival_time": None,
             "duration": None, "fare": None, "stops": 1},
        ]],
    )

    flights = FlightRepository().get_by_route("JFK", "DXB")

    sql, params = conn._cursor.executed[0]
    assert "get_flights_by_route(%s, %s)" in sql
    assert params == ("JFK", "DXB")
    assert conn.cursor_factories == [extras.RealDictCursor]
    assert [f.id for f in flights] == [3, 7]
    assert flights[0].fare == 1299.99
    assert flights[0].is_direct()
    assert flights[1].fare is None
    assert flights[1].route == "JFK → DXB"
    assert conn.released == 1


def test_flight_row_keeps_default_currency_when_missing():
    flight = FlightRepository._row_to_flight({"id": 1, "fare": Decimal("10.50"), "stops": 0})

    assert flight == Flight(id=1, fare=10.5, stops=0)
    assert flight.currency == "AED"


def test_flights_for_location_filters_view_case_insensitively(fake_db):
    conn = fake_db(flight_repo, results=[[
        {"id": 1, "flight_name": "EK 201", "location_name": "Dubai", "currency": "USD", "fare": Decimal("500")},
    ]])

    flights = FlightRepository().get_for_location("dubai")

    sql, params = conn._cursor.executed[0]
    assert "v_flights_with_location" in sql
    assert "LOWER(location_name) = LOWER(%s)" in sql
    assert params == ("dubai",)
    assert flights[0].location_name == "Dubai"
    assert flights[0].currency == "USD"


def test_attractions_by_city_maps_function_columns(fake_db):
    conn = fake_db(attraction_repo, results=[[
        {"id": 1, "name": "Burj Khalifa", "city": "Dubai", "price": Decimal("149.00"),
         "rating": Decimal("4.80"), "review_count": 15234},
        {"id": 2, "name": "Desert Safari", "city": "dubai", "price": None,
         "rating": None, "review_count": None},
    ]])

    attractions = AttractionRepository().get_by_city("DUBAI")

    sql, params = conn._cursor.executed[0]
    assert "get_attractions_by_city(%s)" in sql
    assert params == ("DUBAI",)
    assert attractions[0].attraction_name == "Burj Khalifa"
    assert attractions[0].rating == 4.8
    assert attractions[0].price == 149.0
    assert attractions[1].rating is None


def test_full_attraction_decodes_images_and_inclusions():
    row = {
        "id": 9,
        "attraction_slug": "burj-khalifa",
        "attraction_name": "Burj Khalifa",
        "price": Decimal("149.00"),
        "currency": "AED",
        "rating": Decimal("4.80"),
        "review_count": 15234,
        "city": "Dubai",
        "country": "United Arab Emirates",
        "location_name": "Dubai",
        "images": [
            {"url": "https://img/2.jpg", "caption": None, "order": 2},
            {"url": "https://img/1.jpg", "caption": "Top", "order": 1},
        ],
        "inclusions": ["Skip-the-line ticket", "Audio guide"],
    }

    attraction = AttractionRepository._row_to_attraction(row)

    assert [img.image_url for img in attraction.images] == ["https://img/1.jpg", "https://img/2.jpg"]
    assert attraction.images[0].caption == "Top"
    assert attraction.images[0].attraction_id == 9
    assert attraction.inclusions == ["Audio guide", "Skip-the-line ticket"]
    assert attraction.location_name == "Dubai"


def test_full_attraction_without_children():
    attraction = AttractionRepository._row_to_attraction(
        {"id": 1, "attraction_name": "Museum", "images": None, "inclusions": None}
    )

    assert attraction.images == []
    assert attraction.inclusions == []


def test_get_full_adds_city_filter_only_when_given(fake_db):
    conn = fake_db(attraction_repo, results=[[], []])
    repo = AttractionRepository()

    repo.get_full()
    repo.get_full("Dubai")

    (all_sql, all_params), (city_sql, city_params) = conn._cursor.executed
    assert "WHERE" not in all_sql
    assert all_params == []
    assert "WHERE LOWER(city) = LOWER(%s)" in city_sql
    assert city_params == ["Dubai"]


def test_count_by_country(fake_db):
    fake_db(attraction_repo, results=[[("United Arab Emirates", 2, Decimal("4.65")), (None, 1, None)]])

    counts = AttractionRepository().count_by_country()

    assert counts == [
        {"country": "United Arab Emirates", "attraction_count": 2, "avg_rating": 4.65},
        {"country": None, "attraction_count": 1, "avg_rating": None},
    ]


def test_location_by_id_converts_coordinates(fake_db):
    fake_db(location_repo, results=[[{
        "id": 1, "location_name": "Dubai", "country": "United Arab Emirates", "country_code": "ae",
        "latitude": Decimal("25.20480000"), "longitude": Decimal("55.27080000"),
        "dest_id": "dest_dubai_123", "timezone": "Asia/Dubai",
        "created_at": datetime(2025, 1, 1), "updated_at": datetime(2025, 1, 1),
    }]])

    location = LocationRepository().get_by_id(1)

    assert location.latitude == 25.2048
    assert location.has_coordinates()
    assert str(location) == "Dubai, United Arab Emirates"


def test_location_by_id_missing(fake_db):
    fake_db(location_repo, results=[[]])

    assert LocationRepository().get_by_id(42) is None


def test_stats_from_view(fake_db):
    fake_db(stats_repo, results=[[{
        "total_locations": 0, "total_flights": 0, "total_attractions": 0,
        "total_images": 0, "total_inclusions": 0, "unique_countries": 0,
        "avg_attraction_rating": None, "avg_flight_fare": None,
    }]])

    stats = StatsRepository().get_stats()

    assert stats.is_empty()
    assert stats.avg_flight_fare is None


def test_record_counts(fake_db):
    fake_db(stats_repo, results=[[(1, 2, 3)]])

    assert StatsRepository().get_record_counts() == {"locations": 1, "flights": 2, "attractions": 3}


def test_recent_locations_passes_limit(fake_db):
    conn = fake_db(location_repo, results=[[]])

    assert LocationRepository().get_recent(5) == []
    sql, params = conn._cursor.executed[0]
    assert "ORDER BY created_at DESC" in sql
    assert params == (5,)


def test_images_and_inclusions_by_attraction(fake_db):
    fake_db(attraction_repo, results=[
        [{"id": 1, "attraction_id": 9, "image_url": "https://img/1.jpg", "caption": None,
          "display_order": 0, "created_at": None}],
        [{"id": 4, "attraction_id": 9, "inclusion_text": "Audio guide", "created_at": None}],
    ])
    repo = AttractionRepository()

    (image,) = repo.get_images(9)
    (inclusion,) = repo.get_inclusions(9)

    assert image.image_url == "https://img/1.jpg"
    assert inclusion.inclusion_text == "Audio guide"
    assert inclusion.attraction_id == 9


def test_top_rated_and_cheapest_reports(fake_db):
    fake_db(attraction_repo, results=[[
        {"id": 1, "attraction_name": "Burj Khalifa", "city": "Dubai", "country": "UAE",
         "price": Decimal("149.00"), "currency": "AED", "rating": Decimal("4.80"), "review_count": 10},
    ]])
    conn = fake_db(flight_repo, results=[[{"id": 2, "flight_name": "EK 1", "fare": Decimal("99.00")}]])

    (top,) = AttractionRepository().get_top_rated(1)
    (cheapest,) = FlightRepository().get_cheapest(1)

    assert top.rating == 4.8
    assert cheapest.fare == 99.0
    assert "WHERE fare IS NOT NULL" in conn._cursor.executed[0][0]


def test_stats_model_defaults_are_empty():
    from models.stats import DatabaseStats

    stats = DatabaseStats()

    assert stats.is_empty()
    assert DatabaseStats.__doc__
