"""TravelSafe backend: trips, scam reports and incident map data."""
