"""Health industry producers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Sequence

from mocksmith.models import GeneratorInfo
from mocksmith.producers.common import (
    case_params,
    format_param,
    moment_in,
    pick,
    render_composite,
    rng,
    window,
)
from mocksmith.producers.temporal import rfc3339
from mocksmith.producers.vocabularies import (
    ALLERGIES,
    BLOOD_TYPES,
    DIAGNOSES,
    DIASTOLIC_RANGE,
    HEART_RATE_RANGE,
    LAB_RANGES,
    MEDICAL_CONDITIONS,
    MEDICATIONS,
    RESPIRATORY_RATE_RANGE,
    SYMPTOMS,
    SYSTOLIC_RANGE,
    TEMPERATURE_RANGE,
    UNIT_BPM,
    UNIT_BREATHS_MIN,
    UNIT_FAHRENHEIT,
    UNIT_MM_HG,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def generate_blood_type(params: Mapping[str, Any]) -> str:
    return pick(params, BLOOD_TYPES)


def generate_medical_condition(params: Mapping[str, Any]) -> str:
    return pick(params, MEDICAL_CONDITIONS)


def generate_medication(params: Mapping[str, Any]) -> str:
    return pick(params, MEDICATIONS)


def generate_symptom(params: Mapping[str, Any]) -> str:
    return pick(params, SYMPTOMS)


def generate_diagnosis(params: Mapping[str, Any]) -> str:
    return pick(params, DIAGNOSES)


def generate_allergy(params: Mapping[str, Any]) -> str:
    return pick(params, ALLERGIES)


def _uniform(params: Mapping[str, Any], low: float, high: float) -> float:
    return round(low + rng(params).random() * (high - low), 1)


def build_lab_result(params: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    return {
        name: {"value": _uniform(params, low, high), "unit": unit}
        for name, (low, high, unit) in LAB_RANGES.items()
    }


def build_vital_sign(params: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    rand = rng(params)
    return {
        "blood_pressure": {
            "systolic": rand.randint(*SYSTOLIC_RANGE),
            "diastolic": rand.randint(*DIASTOLIC_RANGE),
            "unit": UNIT_MM_HG,
        },
        "heart_rate": {"value": rand.randint(*HEART_RATE_RANGE), "unit": UNIT_BPM},
        "temperature": {"value": _uniform(params, *TEMPERATURE_RANGE), "unit": UNIT_FAHRENHEIT},
        "respiratory_rate": {"value": rand.randint(*RESPIRATORY_RATE_RANGE), "unit": UNIT_BREATHS_MIN},
    }


def _lab_summary(lab: Dict[str, Dict[str, Any]]) -> str:
    return ", ".join(f"{name.capitalize()}: {entry['value']} {entry['unit']}" for name, entry in lab.items())


def _vital_summary(vitals: Dict[str, Dict[str, Any]]) -> str:
    bp = vitals["blood_pressure"]
    return (
        f"BP: {bp['systolic']}/{bp['diastolic']} {bp['unit']}, "
        f"HR: {vitals['heart_rate']['value']} {vitals['heart_rate']['unit']}, "
        f"Temp: {vitals['temperature']['value']} {vitals['temperature']['unit']}, "
        f"RR: {vitals['respiratory_rate']['value']} {vitals['respiratory_rate']['unit']}"
    )


def generate_lab_result(params: Mapping[str, Any]) -> str:
    lab = build_lab_result(params)
    return render_composite(params, lab, _lab_summary(lab))


def generate_vital_sign(params: Mapping[str, Any]) -> str:
    vitals = build_vital_sign(params)
    return render_composite(params, vitals, _vital_summary(vitals))


def _some(params: Mapping[str, Any], values: Sequence[str], low: int, high: int) -> List[str]:
    rand = rng(params)
    return rand.sample(list(values), rand.randint(low, high))


def generate_medical_record(params: Mapping[str, Any]) -> str:
    start, end = window(params)
    record = {
        "patient_id": f"P{rng(params).randrange(100_000_000):08d}",
        "blood_type": generate_blood_type(params),
        "conditions": _some(params, MEDICAL_CONDITIONS, 1, 3),
        "medications": _some(params, MEDICATIONS, 0, 3),
        "allergies": _some(params, ALLERGIES, 0, 2),
        "current_symptoms": _some(params, SYMPTOMS, 1, 3),
        "diagnoses": _some(params, DIAGNOSES, 1, 2),
        "lab_results": build_lab_result(params),
        "vital_signs": build_vital_sign(params),
        "last_updated": rfc3339(moment_in(params, start, end)),
    }
    summary = (
        f"Patient {record['patient_id']} ({record['blood_type']}): "
        f"conditions {', '.join(record['conditions'])}; "
        f"diagnoses {', '.join(record['diagnoses'])}; "
        f"medications {', '.join(record['medications']) or 'none'}; "
        f"allergies {', '.join(record['allergies']) or 'none'}"
    )
    return render_composite(params, record, summary)


def register(builder: EngineBuilder) -> None:
    scalars = [
        ("blood_type", "ABO/Rh blood type", "O+", generate_blood_type),
        ("medical_condition", "Common medical condition", "Hypertension", generate_medical_condition),
        ("medication", "Common medication", "Metformin", generate_medication),
        ("symptom", "Common symptom", "Headache", generate_symptom),
        ("diagnosis", "Common diagnosis", "Influenza", generate_diagnosis),
        ("allergy", "Common allergy", "Peanuts", generate_allergy),
    ]
    for name, description, example, producer in scalars:
        builder.add(
            GeneratorInfo("health", name, description, example, [format_param(), *case_params()]),
            producer,
        )

    composites = [
        ("lab_result", "Glucose, cholesterol and hemoglobin readings", generate_lab_result),
        ("vital_sign", "Blood pressure, heart rate, temperature and respiratory rate",
         generate_vital_sign),
        ("medical_record", "Patient record with conditions, medications and readings",
         generate_medical_record),
    ]
    for name, description, producer in composites:
        builder.add(
            GeneratorInfo("health", name, description, None, [format_param()]),
            producer,
        )
