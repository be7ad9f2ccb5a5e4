"""Default maritime location table with fixed coordinates."""

from oceanova.config.schema import LocationConfig


def _loc(name: str, lat: float, lon: float) -> LocationConfig:
    return LocationConfig(name=name, latitude=lat, longitude=lon)


DEFAULT_LOCATIONS: list[LocationConfig] = [
    # Oceans and seas
    _loc("Arabian Sea", 15, 65),
    _loc("Bay of Bengal", 15, 88),
    _loc("Indian Ocean", -20, 80),
    _loc("Atlantic Ocean", 0, -30),
    _loc("Pacific Ocean", 0, -150),
    _loc("Arctic Ocean", 80, 0),
    _loc("Southern Ocean", -70, 0),
    _loc("North Sea", 56, 3),
    _loc("Mediterranean Sea", 35, 18),
    _loc("Caribbean Sea", 15, -75),
    _loc("Gulf of Mexico", 25, -90),
    _loc("Persian Gulf", 26, 51),
    _loc("Red Sea", 20, 39),
    _loc("Black Sea", 44, 35),
    _loc("Bering Sea", 58, -175),
    _loc("Baltic Sea", 58, 20),
    _loc("South China Sea", 10, 115),
    _loc("East China Sea", 30, 125),
    _loc("Sea of Japan", 40, 135),
    _loc("Gulf of Aden", 12.5, 47),
    _loc("Tasman Sea", -40, 160),
    # Straits and canals
    _loc("Strait of Hormuz", 26.5, 56.5),
    _loc("Suez Canal", 30.5, 32.5),
    _loc("Panama Canal", 9.1, -79.9),
    _loc("Strait of Malacca", 3.1, 101.4),
    _loc("English Channel", 50.5, -1),
    _loc("Gibraltar Strait", 35.9, -5.5),
    _loc("Bosphorus Strait", 41.1, 29.1),
    _loc("Singapore Strait", 1.2, 103.8),
    _loc("Dover Strait", 51, 1.5),
    # Other
    _loc("Cape of Good Hope", -34.5, 18.5),
    _loc("Horn of Africa", 8, 50),
    _loc("Great Barrier Reef", -18, 147),
    # Indian ports and waters
    _loc("Mumbai Port", 18.96, 72.82),
    _loc("Chennai Port", 13.08, 80.27),
    _loc("Kolkata Port", 22.56, 88.36),
    _loc("Visakhapatnam Port", 17.70, 83.21),
    _loc("Kochi Port", 9.96, 76.26),
    _loc("Goa (Mormugao Port)", 15.42, 73.80),
    _loc("Port Blair (Andaman)", 11.62, 92.73),
    _loc("Gulf of Kutch", 22.6, 69.5),
    _loc("Lakshadweep Sea", 10, 72),
    _loc("Andaman Sea", 12, 95),
]
