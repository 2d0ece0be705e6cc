"""Medical record category taxonomy.

Each category carries literal keywords, case-insensitive regex patterns and
an integer weight.  A pattern hit scores ``weight * 2``, a keyword hit
scores ``weight``.  Declaration order is significant: the classifier keeps
the first category on equal scores, so ``TAXONOMY`` is an ordered tuple.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern

FALLBACK_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryDefinition:
    """A single taxonomy entry."""

    name: str
    keywords: tuple[str, ...]
    patterns: tuple[Pattern[str], ...]
    weight: int


def _category(name: str, keywords: list[str], patterns: list[str], weight: int) -> CategoryDefinition:
    return CategoryDefinition(
        name=name,
        keywords=tuple(keywords),
        patterns=tuple(re.compile(p, re.IGNORECASE) for p in patterns),
        weight=weight,
    )


TAXONOMY: tuple[CategoryDefinition, ...] = (
    _category(
        "Blood Test",
        ["blood", "cbc", "hemoglobin", "wbc", "rbc", "platelet", "glucose",
         "cholesterol", "lipid", "hba1c", "thyroid", "tsh", "hemogram"],
        [r"blood[\s_-]?test", r"cbc", r"complete[\s_-]?blood[\s_-]?count",
         r"hemoglobin", r"lipid[\s_-]?profile"],
        10,
    ),
    _category(
        "Lab Report",
        ["lab", "laboratory", "test", "analysis", "culture", "urine", "stool",
         "biopsy", "pathology", "cytology", "microbiology"],
        [r"lab[\s_-]?report", r"laboratory", r"pathology", r"test[\s_-]?result"],
        8,
    ),
    _category(
        "X-Ray",
        ["xray", "x-ray", "radiograph", "chest", "skeletal", "bone", "fracture", "dental"],
        [r"x[\s_-]?ray", r"radiograph", r"chest[\s_-]?x"],
        10,
    ),
    _category(
        "CT Scan",
        ["ct", "computed", "tomography", "cat scan", "contrast"],
        [r"ct[\s_-]?scan", r"computed[\s_-]?tomography", r"cat[\s_-]?scan"],
        10,
    ),
    _category(
        "MRI Scan",
        ["mri", "magnetic", "resonance", "brain", "spine", "knee", "shoulder"],
        [r"mri", r"magnetic[\s_-]?resonance"],
        10,
    ),
    _category(
        "Ultrasound",
        ["ultrasound", "sonography", "usg", "doppler", "echo", "prenatal", "abdomen", "pelvic"],
        [r"ultra[\s_-]?sound", r"sonography", r"usg", r"doppler"],
        10,
    ),
    _category(
        "ECG/EKG",
        ["ecg", "ekg", "electrocardiogram", "cardiac", "heart", "rhythm"],
        [r"ecg", r"ekg", r"electro[\s_-]?cardio", r"cardiac[\s_-]?rhythm"],
        10,
    ),
    _category(
        "Pathology Report",
        ["pathology", "histopathology", "cytology", "tissue", "specimen", "microscopic"],
        [r"pathology[\s_-]?report", r"histopathology", r"cytology"],
        9,
    ),
    _category(
        "Biopsy Report",
        ["biopsy", "tissue", "sample", "excision", "needle", "fnac"],
        [r"biopsy", r"fnac", r"fine[\s_-]?needle"],
        10,
    ),
    _category(
        "Diagnosis Report",
        ["diagnosis", "diagnostic", "assessment", "evaluation", "clinical", "findings", "impression"],
        [r"diagnosis", r"diagnostic[\s_-]?report", r"clinical[\s_-]?assessment"],
        7,
    ),
    _category(
        "Prescription",
        ["prescription", "medication", "drugs", "pharmacy", "dosage", "rx",
         "medicine", "tablet", "capsule"],
        [r"prescription", r"rx", r"medication[\s_-]?list", r"drug[\s_-]?chart"],
        10,
    ),
    _category(
        "Surgical Report",
        ["surgery", "surgical", "operation", "operative", "procedure", "incision",
         "suture", "laparoscopy", "appendectomy"],
        [r"surgical[\s_-]?report", r"operative[\s_-]?report", r"surgery", r"operation"],
        10,
    ),
    _category(
        "Discharge Summary",
        ["discharge", "summary", "hospital", "admission", "inpatient", "released"],
        [r"discharge[\s_-]?summary", r"discharge[\s_-]?report", r"hospital[\s_-]?summary"],
        10,
    ),
    _category(
        "Vaccination Record",
        ["vaccination", "vaccine", "immunization", "shot", "covid", "flu", "hepatitis", "tetanus"],
        [r"vaccination", r"vaccine", r"immunization", r"covid"],
        10,
    ),
    _category(
        "Allergy Report",
        ["allergy", "allergic", "reaction", "sensitivity", "intolerance", "anaphylaxis"],
        [r"allergy", r"allergic", r"sensitivity[\s_-]?test"],
        10,
    ),
    _category(
        "Test Report",
        ["test", "screening", "panel", "metabolic", "renal", "hepatic", "function"],
        [r"test[\s_-]?report", r"screening", r"panel"],
        6,
    ),
    _category(
        "Scan Report",
        ["scan", "imaging", "radiology", "pet", "dexa"],
        [r"scan[\s_-]?report", r"imaging[\s_-]?report", r"radiology"],
        7,
    ),
    _category(
        "Medical Certificate",
        ["certificate", "fitness", "medical", "clearance", "fit", "sick", "leave"],
        [r"medical[\s_-]?certificate", r"fitness[\s_-]?certificate", r"sick[\s_-]?leave"],
        10,
    ),
)

# Legacy ``MedicalRecord.type`` enum values assigned on high-confidence results.
RECORD_TYPES: tuple[str, ...] = (
    "lab_result", "xray", "ct_scan", "mri", "ultrasound", "report", "prescription", "other",
)

RECORD_TYPE_MAPPING: dict[str, str] = {
    "Blood Test": "lab_result",
    "Lab Report": "lab_result",
    "Test Report": "lab_result",
    "X-Ray": "xray",
    "CT Scan": "ct_scan",
    "MRI Scan": "mri",
    "Ultrasound": "ultrasound",
    "Scan Report": "ct_scan",
    "Prescription": "prescription",
    "Surgical Report": "report",
    "Diagnosis Report": "report",
    "Discharge Summary": "report",
    "Pathology Report": "lab_result",
    "Biopsy Report": "lab_result",
}


def get_all_categories() -> list[str]:
    """Return every taxonomy category name, in declaration order."""
    return [category.name for category in TAXONOMY]


def map_category_to_record_type(category: str) -> str:
    """Map a taxonomy category to the record ``type`` enum, ``other`` when unmapped."""
    return RECORD_TYPE_MAPPING.get(category, "other")


def check_record_type_mapping(
    mapping: dict[str, str],
    taxonomy: tuple[CategoryDefinition, ...] = TAXONOMY,
) -> None:
    """Raise ``ValueError`` if a mapping entry names an unknown category or record type."""
    names = {category.name for category in taxonomy}
    for category, record_type in mapping.items():
        if category not in names:
            raise ValueError(f"Record type mapping names unknown category {category!r}")
        if record_type not in RECORD_TYPES:
            raise ValueError(f"Category {category!r} maps to unknown record type {record_type!r}")


check_record_type_mapping(RECORD_TYPE_MAPPING)
