"""Default condition catalog, ordered from calm to severe."""

from wxsim.config.schema import ConditionConfig

DEFAULT_CONDITIONS: list[ConditionConfig] = [
    ConditionConfig(
        name="Sunny",
        icon="☀️",
        min_temp=10,
        max_temp=30,
        variance=3,
        min_humidity=25,
        max_humidity=50,
        max_wind=15,
        transition_probability=0.1,
    ),
    ConditionConfig(
        name="Partly Cloudy",
        icon="🌤️",
        min_temp=8,
        max_temp=24,
        variance=4,
        min_humidity=35,
        max_humidity=60,
        max_wind=20,
        transition_probability=0.2,
    ),
    ConditionConfig(
        name="Cloudy",
        icon="☁️",
        min_temp=5,
        max_temp=18,
        variance=3,
        min_humidity=50,
        max_humidity=75,
        max_wind=25,
        transition_probability=0.3,
    ),
    ConditionConfig(
        name="Rain",
        icon="🌧️",
        min_temp=3,
        max_temp=15,
        variance=2,
        min_humidity=75,
        max_humidity=95,
        max_wind=30,
        transition_probability=0.4,
        precipitation=True,
    ),
    ConditionConfig(
        name="Sleet",
        icon="🌨️",
        min_temp=-5,
        max_temp=3,
        variance=2,
        min_humidity=80,
        max_humidity=98,
        max_wind=35,
        transition_probability=0.5,
        precipitation=True,
    ),
    ConditionConfig(
        name="Heavy Rain",
        icon="⛈️",
        min_temp=2,
        max_temp=13,
        variance=2,
        min_humidity=85,
        max_humidity=100,
        max_wind=45,
        transition_probability=0.5,
        precipitation=True,
        severe=True,
    ),
    ConditionConfig(
        name="Hail",
        icon="🧊",
        min_temp=0,
        max_temp=10,
        variance=3,
        min_humidity=70,
        max_humidity=95,
        max_wind=50,
        transition_probability=0.6,
        precipitation=True,
        severe=True,
    ),
    ConditionConfig(
        name="Thunderstorms",
        icon="🌩️",
        min_temp=2,
        max_temp=12,
        variance=3,
        min_humidity=80,
        max_humidity=100,
        max_wind=60,
        transition_probability=0.7,
        precipitation=True,
        severe=True,
    ),
]
