"""Aviation industry producers."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Dict, Mapping

from mocksmith.models import GeneratorInfo
from mocksmith.producers.common import (
    case_params,
    format_param,
    pick,
    reference_time,
    render_composite,
    rng,
)
from mocksmith.producers.vocabularies import (
    AIRCRAFT_TYPES,
    AIRLINE_CODES,
    AIRPORT_CODES,
    BAGGAGE_CLAIMS,
    FLIGHT_STATUSES,
    SEAT_LETTERS,
    TERMINALS,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def generate_aircraft_type(params: Mapping[str, Any]) -> str:
    return pick(params, AIRCRAFT_TYPES)


def generate_flight_number(params: Mapping[str, Any]) -> str:
    return f"{pick(params, AIRLINE_CODES)}{rng(params).randint(1000, 9999)}"


def generate_airport_code(params: Mapping[str, Any]) -> str:
    return pick(params, AIRPORT_CODES)


def generate_gate_number(params: Mapping[str, Any]) -> str:
    return f"{pick(params, TERMINALS)}{rng(params).randint(1, 99)}"


def generate_seat_number(params: Mapping[str, Any]) -> str:
    row = rng(params).randint(1, 40)
    return f"{row}{pick(params, SEAT_LETTERS)}"


def generate_flight_status(params: Mapping[str, Any]) -> str:
    return pick(params, FLIGHT_STATUSES)


def generate_baggage_claim(params: Mapping[str, Any]) -> str:
    return pick(params, BAGGAGE_CLAIMS)


def build_schedule(params: Mapping[str, Any]) -> Dict[str, str]:
    """Departure within a day of the reference time, arrival 1-12 hours later."""
    rand = rng(params)
    offset = timedelta(hours=rand.randint(0, 23), minutes=rand.choice([0, 15, 30, 45]))
    departure = reference_time(params) + offset
    arrival = departure + timedelta(hours=rand.randint(1, 12))
    return {
        "departure_time": departure.strftime("%H:%M"),
        "arrival_time": arrival.strftime("%H:%M"),
        "departure_date": departure.strftime("%Y-%m-%d"),
        "arrival_date": arrival.strftime("%Y-%m-%d"),
    }


def _schedule_summary(schedule: Dict[str, str]) -> str:
    return (
        f"Departure: {schedule['departure_time']} on {schedule['departure_date']}, "
        f"Arrival: {schedule['arrival_time']} on {schedule['arrival_date']}"
    )


def generate_flight_schedule(params: Mapping[str, Any]) -> str:
    schedule = build_schedule(params)
    return render_composite(params, schedule, _schedule_summary(schedule))


def generate_flight_info(params: Mapping[str, Any]) -> str:
    rand = rng(params)
    origin, destination = rand.sample(AIRPORT_CODES, 2)
    info = {
        "flight_number": generate_flight_number(params),
        "aircraft_type": generate_aircraft_type(params),
        "origin": origin,
        "destination": destination,
        "gate": generate_gate_number(params),
        "status": generate_flight_status(params),
        "baggage_claim": generate_baggage_claim(params),
        "schedule": build_schedule(params),
    }
    summary = (
        f"Flight {info['flight_number']} ({info['aircraft_type']}) "
        f"{origin} -> {destination}, gate {info['gate']}, {info['status']}, "
        f"baggage claim {info['baggage_claim']}; {_schedule_summary(info['schedule'])}"
    )
    return render_composite(params, info, summary)


def register(builder: EngineBuilder) -> None:
    scalars = [
        ("aircraft_type", "Aircraft model", "Boeing 737", generate_aircraft_type),
        ("flight_number", "Airline code and flight number", "AA1234", generate_flight_number),
        ("airport_code", "IATA airport code", "JFK", generate_airport_code),
        ("gate_number", "Terminal letter and gate number", "A12", generate_gate_number),
        ("seat_number", "Seat row and letter", "23C", generate_seat_number),
        ("flight_status", "Flight status", "On Time", generate_flight_status),
        ("baggage_claim", "Baggage claim area", "B", generate_baggage_claim),
    ]
    for name, description, example, producer in scalars:
        builder.add(
            GeneratorInfo("aviation", name, description, example, [format_param(), *case_params()]),
            producer,
        )

    builder.add(
        GeneratorInfo(
            "aviation", "flight_schedule", "Departure and arrival times",
            '{"arrival_date":"2024-03-15","arrival_time":"18:30",'
            '"departure_date":"2024-03-15","departure_time":"14:30"}',
            [format_param()],
        ),
        generate_flight_schedule,
    )
    builder.add(
        GeneratorInfo(
            "aviation", "flight_info", "Complete flight record",
            '{"aircraft_type":"Boeing 737","flight_number":"AA1234",...}',
            [format_param()],
        ),
        generate_flight_info,
    )
