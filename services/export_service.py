"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of attraction and flight data.
"""

import io
from dataclasses import asdict

import pandas as pd

from repositories.attraction_repo import AttractionRepository
from repositories.flight_repo import FlightRepository
from repositories.stats_repo import StatsRepository
from utils.logger import get_logger

logger = get_logger(__name__)

ATTRACTION_COLUMNS = {
    "attraction_name": "Name",
    "city": "City",
    "country": "Country",
    "price": "Price",
    "currency": "Currency",
    "rating": "Rating",
    "review_count": "Reviews",
}

FLIGHT_COLUMNS = {
    "flight_name": "Flight",
    "departure_time": "Departure",
    "arrival_time": "Arrival",
    "duration": "Duration",
    "stops": "Stops",
    "fare": "Fare",
}


class ExportService:
    """Builds downloadable reports in CSV and Excel formats."""

    def __init__(self):
        self.attraction_repo = AttractionRepository()
        self.flight_repo = FlightRepository()
        self.stats_repo = StatsRepository()

    def export_city_csv(self, city: str) -> io.BytesIO:
        """
        Export the attractions of a city as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self._attractions_frame(city)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} attractions in '{city}' as CSV")
        return buffer

    def export_city_excel(self, city: str) -> io.BytesIO:
        """
        Export the attractions of a city as an Excel (.xlsx) file,
        with a second sheet of database-wide statistics.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self._attractions_frame(city)
        stats = asdict(self.stats_repo.get_stats())

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Attractions", index=False)

            summary = pd.DataFrame(
                [{"Metric": key.replace("_", " ").capitalize(), "Value": value}
                 for key, value in stats.items()]
            )
            summary.to_excel(writer, sheet_name="Summary", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} attractions in '{city}' as Excel")
        return buffer

    def export_route_csv(self, departure_code: str, arrival_code: str) -> io.BytesIO:
        """Export the flights on a route as a CSV file, cheapest first."""
        flights = self.flight_repo.get_by_route(departure_code, arrival_code)
        df = pd.DataFrame(
            [{label: getattr(f, attr) for attr, label in FLIGHT_COLUMNS.items()} for f in flights],
            columns=list(FLIGHT_COLUMNS.values()),
        )
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} flights for {departure_code} → {arrival_code} as CSV")
        return buffer

    def _attractions_frame(self, city: str) -> pd.DataFrame:
        attractions = self.attraction_repo.get_full(city)
        data = [
            {
                **{label: getattr(a, attr) for attr, label in ATTRACTION_COLUMNS.items()},
                "Images": len(a.images),
                "Included": "; ".join(a.inclusions),
            }
            for a in attractions
        ]
        return pd.DataFrame(data, columns=[*ATTRACTION_COLUMNS.values(), "Images", "Included"])
