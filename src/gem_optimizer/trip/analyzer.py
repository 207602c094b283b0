"""Trip context analyzer — trip data → categorical analysis → optimizer input.

Three steps, all pure:
  1. ``analyze_trip``              — classify weather, terrain, load, distance,
                                     schedule and special requirements
  2. ``calculate_trip_priorities`` — eight 0–10 priorities from the analysis
  3. ``build_optimizer_input``     — map the analysis back onto the base
                                     optimizer's ``OptimizationInput``
"""

from __future__ import annotations

from gem_optimizer.config.environment import EnvironmentProfile, TemperatureRange, Terrain, VehicleLoad
from gem_optimizer.config.priorities import PriorityWeights
from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.trip import TripData
from gem_optimizer.models.trip import (
    DistanceAnalysis,
    LoadAnalysis,
    ScheduleAnalysis,
    SpecialRequirement,
    TerrainAnalysis,
    TripAnalysis,
    TripPriorities,
    WeatherAnalysis,
)

HOT_THRESHOLD_F = 85
COLD_THRESHOLD_F = 50
HIGH_WIND_MPH = 15

LONG_TRIP_MILES = 20
MEDIUM_TRIP_MILES = 10
SINGLE_CHARGE_MILES = 30

VEHICLE_CAPACITY = {"e2": 2, "e4": 4, "e6": 6, "eS": 2, "eL": 2, "elXD": 2}
DEFAULT_CAPACITY = 4

STRICT_EVENTS = ("parade", "scheduled")

TERRAIN_FOR_DIFFICULTY = {
    "easy": Terrain.FLAT,
    "moderate": Terrain.MIXED,
    "hard": Terrain.MODERATE,
    "extreme": Terrain.STEEP,
}

LOAD_FOR_WEIGHT = {
    "light": VehicleLoad.LIGHT,
    "normal": VehicleLoad.MEDIUM,
    "moderate": VehicleLoad.HEAVY,
    "heavy": VehicleLoad.MAX,
}

TEMPERATURE_FOR_WEATHER = {
    "cold": TemperatureRange.COLD,
    "optimal": TemperatureRange.MILD,
    "hot": TemperatureRange.HOT,
}


# ═══════════════════════════════════════════════════════════════════════════
# Per-group analysis
# ═══════════════════════════════════════════════════════════════════════════

def analyze_weather(trip: TripData) -> WeatherAnalysis:
    analysis = WeatherAnalysis()
    if trip.weather is None:
        return analysis

    temp = trip.weather.temperature_f
    if temp > HOT_THRESHOLD_F:
        analysis.temperature = "hot"
        analysis.impacts += ["motor_cooling", "battery_stress"]
    elif temp < COLD_THRESHOLD_F:
        analysis.temperature = "cold"
        analysis.impacts += ["battery_capacity", "motor_warmup"]
    else:
        analysis.temperature = "optimal"

    conditions = (trip.weather.conditions or "").lower()
    if "rain" in conditions or "storm" in conditions:
        analysis.conditions = "rain"
        analysis.severity = "moderate"
        analysis.impacts += ["traction", "visibility", "braking_distance"]
    elif "wind" in conditions:
        analysis.conditions = "wind"
        analysis.impacts += ["stability", "efficiency"]
    else:
        analysis.conditions = "clear"

    if trip.weather.wind is not None and trip.weather.wind.speed_mph > HIGH_WIND_MPH:
        analysis.wind_speed = "high"
        analysis.impacts.append("range_reduction")

    return analysis


def analyze_terrain(trip: TripData) -> TerrainAnalysis:
    analysis = TerrainAnalysis()
    if trip.terrain is None:
        return analysis

    t = trip.terrain
    analysis.data_available = True
    analysis.max_grade = t.max_grade
    analysis.avg_grade = t.avg_grade
    analysis.elevation_gain = t.total_elevation_gain

    if t.max_grade > 15:
        analysis.difficulty = "extreme"
        analysis.challenges += ["steep_climbs", "motor_stress", "brake_heat"]
    elif t.max_grade > 10:
        analysis.difficulty = "hard"
        analysis.challenges += ["sustained_climbs", "range_impact"]
    elif t.max_grade > 5:
        analysis.difficulty = "moderate"
        analysis.challenges.append("occasional_climbs")

    if t.surface:
        analysis.surface = t.surface
        if t.surface != "paved":
            analysis.challenges.append("traction_management")

    analysis.features = list(t.features)
    if "switchbacks" in t.features:
        analysis.challenges += ["tight_turns", "speed_management"]

    return analysis


def analyze_load(trip: TripData) -> LoadAnalysis:
    analysis = LoadAnalysis()
    passengers = trip.passengers

    count = passengers.count if passengers is not None and passengers.count else 1
    capacity = VEHICLE_CAPACITY.get(trip.vehicle.model, DEFAULT_CAPACITY)
    load_pct = count / capacity * 100

    if load_pct >= 80:
        analysis.passenger_load = "full"
        analysis.impacts += ["acceleration_reduced", "range_reduced"]
    elif load_pct >= 40:
        analysis.passenger_load = "moderate"
        analysis.impacts.append("slight_performance_impact")

    cargo = passengers.cargo_load if passengers is not None else "light"
    analysis.cargo_load = cargo
    if cargo == "heavy":
        analysis.impacts += ["significant_range_impact", "brake_stress"]
        analysis.total_weight = "heavy"
    elif cargo == "moderate":
        analysis.impacts.append("moderate_range_impact")
        analysis.total_weight = "moderate"

    if analysis.passenger_load == "full" and analysis.total_weight == "normal":
        analysis.total_weight = "moderate"

    return analysis


def analyze_distance(trip: TripData) -> DistanceAnalysis:
    details = trip.distance_details
    miles = details.estimated_miles
    analysis = DistanceAnalysis(estimated_miles=miles, total_distance=miles)

    if miles > LONG_TRIP_MILES:
        analysis.category = "long"
        analysis.range_requirement = "maximum"
        analysis.charging_needed = miles > SINGLE_CHARGE_MILES
    elif miles > MEDIUM_TRIP_MILES:
        analysis.category = "medium"
        analysis.range_requirement = "good"

    if details.round_trip:
        analysis.total_distance = miles * 2
        if analysis.total_distance > SINGLE_CHARGE_MILES:
            analysis.charging_needed = True

    return analysis


def analyze_schedule(trip: TripData) -> ScheduleAnalysis:
    analysis = ScheduleAnalysis()
    schedule = trip.schedule

    if schedule.duration_days > 1:
        analysis.duration = "multi-day"

    if schedule.departure_time is not None:
        hour = schedule.departure_time.hour
        if hour < 6 or hour > 20:
            analysis.time_of_day = "night"
        elif hour < 10 or hour > 16:
            analysis.time_of_day = "twilight"

    if schedule.event_type in STRICT_EVENTS:
        analysis.flexibility = "strict"

    return analysis


def analyze_special_requirements(trip: TripData) -> list[SpecialRequirement]:
    requirements: list[SpecialRequirement] = []

    event = trip.schedule.event_type
    if event == "parade":
        requirements.append(SpecialRequirement(
            type="parade_mode",
            settings={"acceleration": "ultra_smooth", "speed": "consistent_low", "regen": "minimal"},
        ))
    elif event == "camping":
        requirements.append(SpecialRequirement(
            type="camping_mode",
            settings={"range": "maximum", "cargo": "heavy_duty", "terrain": "variable"},
        ))

    tags = trip.passengers.special_requirements if trip.passengers is not None else []
    if "elderly" in tags:
        requirements.append(SpecialRequirement(
            type="comfort_priority",
            settings={"acceleration": "gentle", "braking": "smooth", "suspension": "soft"},
        ))
    if "motion_sensitive" in tags:
        requirements.append(SpecialRequirement(
            type="motion_comfort",
            settings={"acceleration": "very_gentle", "turning": "gradual"},
        ))

    return requirements


def analyze_trip(trip: TripData) -> TripAnalysis:
    """Classify every trip factor.  Missing groups yield neutral analyses."""
    return TripAnalysis(
        weather=analyze_weather(trip),
        terrain=analyze_terrain(trip),
        load=analyze_load(trip),
        distance=analyze_distance(trip),
        schedule=analyze_schedule(trip),
        special=analyze_special_requirements(trip),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Priorities
# ═══════════════════════════════════════════════════════════════════════════

def calculate_trip_priorities(analysis: TripAnalysis) -> TripPriorities:
    """Start every priority at 5, apply condition deltas, clamp to 0–10."""
    p = {
        "range": 5, "speed": 5, "acceleration": 5, "hill_climbing": 5,
        "regen": 5, "safety": 5, "comfort": 5, "efficiency": 5,
    }

    if analysis.weather.temperature == "hot":
        p["efficiency"] += 3
        p["range"] += 2
        p["acceleration"] -= 2
    elif analysis.weather.temperature == "cold":
        p["efficiency"] += 2
        p["comfort"] += 2

    if analysis.weather.conditions == "rain":
        p["safety"] += 4
        p["acceleration"] -= 3
        p["speed"] -= 2

    if analysis.terrain.difficulty == "extreme":
        p["hill_climbing"] = 10
        p["safety"] += 3
        p["range"] -= 2
    elif analysis.terrain.difficulty == "hard":
        p["hill_climbing"] = 8
        p["regen"] += 3

    if analysis.load.total_weight == "heavy":
        p["hill_climbing"] += 2
        p["acceleration"] -= 2
        p["safety"] += 2

    if analysis.distance.category == "long":
        p["range"] = 9
        p["efficiency"] = 8
        p["comfort"] += 2

    if analysis.has_requirement("camping_mode"):
        p["range"] += 2

    return TripPriorities(**{key: max(0, min(10, value)) for key, value in p.items()})


# ═══════════════════════════════════════════════════════════════════════════
# Optimizer input
# ═══════════════════════════════════════════════════════════════════════════

def build_optimizer_input(
    trip: TripData,
    analysis: TripAnalysis,
    priorities: TripPriorities,
) -> OptimizationInput:
    """Base-optimizer request for this trip.

    Each environment field comes from the trip analysis when the matching
    trip group was supplied, and from ``trip.environment`` otherwise.
    """
    env = trip.environment
    terrain_known = analysis.terrain.data_available

    environment = EnvironmentProfile(
        terrain=TERRAIN_FOR_DIFFICULTY[analysis.terrain.difficulty] if terrain_known else env.terrain,
        vehicle_load=(
            LOAD_FOR_WEIGHT[analysis.load.total_weight] if trip.passengers is not None else env.vehicle_load
        ),
        temperature_range=(
            TEMPERATURE_FOR_WEATHER[analysis.weather.temperature]
            if analysis.weather.temperature is not None
            else env.temperature_range
        ),
        hill_grade=analysis.terrain.max_grade if terrain_known else env.hill_grade,
    )

    return OptimizationInput(
        vehicle=trip.vehicle.model_copy(),
        battery=trip.battery.model_copy(),
        wheel=trip.wheel.model_copy(),
        environment=environment,
        priorities=PriorityWeights(
            range=priorities.range,
            speed=priorities.speed,
            acceleration=priorities.acceleration,
            hill_climbing=priorities.hill_climbing,
            regen=priorities.regen,
        ),
    )
