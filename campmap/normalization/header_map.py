from typing import Dict, Iterable, Mapping, Optional

from loguru import logger

from campmap.models.enums import CampField

# Column labels exactly as they appear in the spreadsheet header (after trimming)
DEFAULT_HEADER_LABELS: Dict[CampField, str] = {
    CampField.NUMBER: "Nr",
    CampField.CATEGORY: "Forma wyjazdu (znormalizowana)",
    CampField.GPS: "Współrzędne GPS",
    CampField.CANCELLED: "Odwołany?",
    CampField.FIRST_NAME: "Imię komendanta/komendantki",
    CampField.LAST_NAME: "Nazwisko komendanta/komendantki",
    CampField.INSTRUCTOR_RANK: "Stopień instruktorski komendanta/komendantki",
    CampField.SCOUT_RANK: "Stopień harcerski komendanta/komendantki",
    CampField.ADDRESS: "Adres lub trasa wyjazdu",
    CampField.EMAIL: "Adres mailowy w domenie @zhr.pl",
    CampField.START_DATE: "Data rozpoczęcia wyjazdu",
    CampField.END_DATE: "Data zakończenia wyjazdu",
    **{
        CampField(f"TEAM_{i}"): f"Nazwa drużyny {i}"
        for i in range(1, 9)
    },
}


class HeaderMap:
    """Canonical field -> actual column name, resolved once per input file."""

    def __init__(self, columns: Mapping[CampField, str]):
        self.columns: Dict[CampField, str] = dict(columns)

    @classmethod
    def from_fieldnames(
        cls,
        fieldnames: Iterable[str],
        labels: Optional[Mapping[CampField, str]] = None,
    ) -> "HeaderMap":
        labels = labels or DEFAULT_HEADER_LABELS
        # Later duplicates win once surrounding whitespace is gone
        trimmed: Dict[str, str] = {}
        for fieldname in fieldnames:
            if fieldname is None:
                continue
            trimmed[fieldname.strip()] = fieldname

        columns: Dict[CampField, str] = {}
        missing = []
        for field, label in labels.items():
            if label in trimmed:
                columns[field] = trimmed[label]
            else:
                missing.append(label)

        if missing:
            logger.debug(f"Columns not present in input, read as empty: {missing}")
        logger.debug(f"Resolved {len(columns)} of {len(labels)} known columns.")
        return cls(columns)

    def has(self, field: CampField) -> bool:
        return field in self.columns

    def get(self, row: Mapping[str, Optional[str]], field: CampField) -> str:
        """Returns the cell for `field`, or an empty string when absent."""
        column = self.columns.get(field)
        if column is None:
            return ""
        value = row.get(column)
        return value if isinstance(value, str) else ""
