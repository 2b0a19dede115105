# infra/export.py
"""
Mise en forme CSV des exports de dossiers marins.

Le formateur ne décide pas de ce qui est visible : il reçoit des lignes
déjà expurgées (dict) et une liste ordonnée de colonnes (clé, en-tête).
"""
import csv
import io
from datetime import date, datetime
from typing import Iterable, List, Tuple

# Export admin (back-office) : coordonnées incluses, notes internes exclues
ADMIN_CREW_COLUMNS: List[Tuple[str, str]] = [
    ("full_name", "Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("rank", "Rank"),
    ("nationality", "Nationality"),
    ("current_location", "Location"),
    ("date_of_birth", "DOB"),
    ("availability_date", "Availability"),
    ("status", "Status"),
    ("priority", "Priority"),
    ("submitted_at", "Submitted"),
]

# Export « sûr client » : sous-ensemble de la projection client
CLIENT_SAFE_COLUMNS: List[Tuple[str, str]] = [
    ("id", "ID"),
    ("full_name", "Name"),
    ("rank", "Rank"),
    ("nationality", "Nationality"),
    ("current_location", "Location"),
    ("availability_date", "Availability"),
    ("preferred_vessel_type", "Preferred Vessel"),
    ("sea_time_summary", "Sea Time"),
]


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(getattr(value, "value", value))


def crew_rows_to_csv(rows: Iterable[dict], columns: List[Tuple[str, str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for _, header in columns])
    for row in rows:
        writer.writerow([_cell(row.get(key)) for key, _ in columns])
    return buffer.getvalue().encode("utf-8")
