from __future__ import annotations

import random

T1_CITIES: dict[str, tuple[str, ...]] = {
    "Atlantic": ("Boston", "Brooklyn", "New York", "Philadelphia", "Toronto"),
    "Central": ("Chicago", "Cleveland", "Detroit", "Indiana", "Milwaukee"),
    "Southeast": ("Atlanta", "Charlotte", "Miami", "Orlando", "Washington"),
    "Northwest": ("Denver", "Minnesota", "Oklahoma City", "Portland", "Utah"),
    "Pacific": ("Golden State", "LA", "Phoenix", "Sacramento", "Los Angeles"),
    "Southwest": ("Dallas", "Houston", "Memphis", "New Orleans", "San Antonio"),
}

CITIES = [
    "Seattle", "Tacoma", "Spokane", "Salem", "Eugene", "Vancouver", "Victoria", "Boise",
    "San Diego", "Anaheim", "Riverside", "Ontario", "Tijuana", "Oakland", "San Jose", "Fresno",
    "Las Vegas", "Reno", "Albuquerque", "Las Cruces", "Tucson", "Hermosillo", "Colorado Springs",
    "Omaha", "Lincoln", "Wichita", "Kansas City", "Des Moines", "Sioux Falls", "Tulsa", "St. Louis",
    "Pittsburgh", "Columbus", "Cincinnati", "Grand Rapids", "Madison", "Fort Wayne", "Toledo",
    "Buffalo", "Louisville", "Nashville", "Birmingham", "Greenville", "Little Rock", "Chattanooga",
    "Knoxville", "Mobile", "Columbia", "Raleigh", "Richmond", "Norfolk", "Greensboro", "Charleston",
    "Savannah", "Montreal", "Quebec", "Ottawa", "Hartford", "Providence", "Albany", "Rochester",
    "Worcester", "Austin", "Corpus Christi", "Lubbock", "Amarillo", "Waco", "Laredo", "Monterrey",
    "Saltillo", "Calgary", "Edmonton", "Saskatoon", "Regina", "Winnipeg", "Lethbridge", "Missoula",
    "Mexico City", "Guadalajara", "Puebla", "Leon", "Queretaro", "Aguascalientes", "Toluca",
    "Glendale", "Pasadena", "Long Beach", "Torrance", "Irvine", "Santa Clarita", "Fremont", "Hayward",
    "Daly City", "San Mateo", "Concord", "San Bernardino", "Moreno Valley", "Fontana", "Corona",
    "Rancho Cucamonga", "Redlands", "Bakersfield", "Modesto", "Stockton", "Visalia", "Merced",
    "Turlock", "Aurora", "Naperville", "Joliet", "Rockford", "Elgin", "Peoria", "Sugar Land",
    "The Woodlands", "Pearland", "League City", "Beaumont", "Arlington", "Plano", "Irving", "Garland",
    "Frisco", "Denton", "Mesa", "Chandler", "Scottsdale", "Gilbert", "Flagstaff", "Marietta", "Roswell",
    "Macon", "Athens", "Warner Robins", "Warren", "Ann Arbor", "Lansing", "Dearborn", "Flint",
    "St. Paul", "Duluth", "St. Cloud", "Mankato", "Bloomington", "Bellevue", "Kent", "Everett",
    "Bellingham", "Yakima", "Kennewick", "Fort Lauderdale", "Pembroke Pines", "Boca Raton",
    "West Palm Beach", "Fort Myers",
]

NICKNAMES = [
    "Aces", "Admirals", "Anchors", "Bandits", "Barons", "Blaze", "Bolts", "Cardinals", "Chargers",
    "Comets", "Condors", "Cougars", "Cyclones", "Dragons", "Drifters", "Eagles", "Express", "Falcons",
    "Flyers", "Foxes", "Generals", "Giants", "Gold", "Hawks", "Herons", "Hornets", "Hurricanes",
    "Jaguars", "Jets", "Knights", "Lancers", "Lightning", "Lynx", "Mariners", "Marshals", "Mavens",
    "Monarchs", "Mustangs", "Navigators", "Outlaws", "Owls", "Panthers", "Pilots", "Pioneers",
    "Pirates", "Raptors", "Rangers", "Ravens", "Rebels", "Riders", "Rockets", "Royals", "Sabres",
    "Scorpions", "Sentinels", "Sharks", "Skyhawks", "Sparks", "Spartans", "Stallions", "Stars",
    "Storm", "Strikers", "Suns", "Thunder", "Titans", "Tornadoes", "Vipers", "Voyagers", "Wolves",
]


class TeamNameGenerator:
    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._used: set[str] = set()
        self._nicknames = list(NICKNAMES)
        self._rng.shuffle(self._nicknames)
        self._pool = [f"{city} {nickname}" for city in CITIES for nickname in NICKNAMES]
        self._rng.shuffle(self._pool)
        self._idx = 0

    def reserve(self, names: list[str]) -> None:
        self._used.update(names)

    def for_city(self, city: str) -> str:
        """A name rooted in ``city``; falls back to a numbered name once every nickname is taken."""
        for nickname in self._nicknames:
            candidate = f"{city} {nickname}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate
        return self._numbered(city)

    def next_name(self) -> str:
        while self._idx < len(self._pool):
            name = self._pool[self._idx]
            self._idx += 1
            if name not in self._used:
                self._used.add(name)
                return name
        return self._numbered(self._rng.choice(CITIES))

    def _numbered(self, base: str) -> str:
        suffix = 1
        while True:
            candidate = f"{base} {suffix}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate
            suffix += 1
