"""CSV loader and validator for student rosters."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .aggregates import SUBJECTS
from .models import StudentRecord

REQUIRED_COLUMNS = ["roll", "name", *SUBJECTS]
OPTIONAL_TEXT_COLUMNS = ["phone", "address"]
OPTIONAL_FEE_COLUMNS = ["total_fee", "fee_paid"]
ROLL_ALIASES = {"roll_no": "roll", "rollno": "roll", "roll_number": "roll"}

logger = logging.getLogger(__name__)


class RosterValidationError(ValueError):
    """Raised when roster data fails validation."""


class RosterLoader:
    """Load and validate roster CSV data."""

    def load_csv(self, path: str | Path, encoding: str = "utf-8") -> pd.DataFrame:
        """Load CSV as text columns and normalize column names."""
        csv_path = Path(path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_path}")

        dataframe = pd.read_csv(csv_path, encoding=encoding, dtype=str)
        return self._normalize_columns(dataframe)

    def validate(self, dataframe: pd.DataFrame) -> None:
        """Validate schema, numeric columns, names, and roll uniqueness."""
        missing = [col for col in REQUIRED_COLUMNS if col not in dataframe.columns]
        if missing:
            raise RosterValidationError(f"Missing required columns: {missing}")

        for column in self._numeric_columns(dataframe):
            try:
                values = pd.to_numeric(dataframe[column], errors="raise")
            except (TypeError, ValueError) as exc:
                raise RosterValidationError(f"Column '{column}' must be numeric.") from exc
            if column in REQUIRED_COLUMNS and values.isna().any():
                raise RosterValidationError(f"Column '{column}' has missing values.")
            fractional = values.notna() & (values % 1 != 0)
            if fractional.any():
                raise RosterValidationError(
                    f"Column '{column}' must hold whole numbers, got: {values[fractional].tolist()}"
                )

        rolls = pd.to_numeric(dataframe["roll"]).astype(int)

        names = dataframe["name"].fillna("").astype(str).str.strip()
        blank_names = names == ""
        if blank_names.any():
            raise RosterValidationError(f"Blank names at rolls: {rolls[blank_names].tolist()}")

        duplicated = rolls.duplicated(keep=False)
        if duplicated.any():
            raise RosterValidationError(
                f"Duplicate rolls detected: {sorted(set(rolls[duplicated].tolist()))}"
            )

    def to_records(self, dataframe: pd.DataFrame) -> list[StudentRecord]:
        """Convert a roster frame into records, preserving row order."""
        self.validate(dataframe)

        working = dataframe.copy()
        for column in self._numeric_columns(working):
            working[column] = pd.to_numeric(working[column])

        records: list[StudentRecord] = []
        for row in working.to_dict(orient="records"):
            text_fields = {
                column: self._clean_text(row.get(column)) for column in OPTIONAL_TEXT_COLUMNS
            }
            fee_fields = {
                column: int(row[column])
                for column in OPTIONAL_FEE_COLUMNS
                if column in row and not pd.isna(row[column])
            }
            marks = {subject: int(row[subject]) for subject in SUBJECTS}
            records.append(
                StudentRecord(
                    roll=int(row["roll"]),
                    name=str(row["name"]).strip(),
                    **text_fields,
                    **marks,
                    **fee_fields,
                )
            )
        return records

    def load_records(self, path: str | Path, encoding: str = "utf-8") -> list[StudentRecord]:
        """Load CSV, validate it, and return records."""
        dataframe = self.load_csv(path, encoding=encoding)
        records = self.to_records(dataframe)
        logger.debug("Loaded %d roster rows from %s", len(records), path)
        return records

    @staticmethod
    def _numeric_columns(dataframe: pd.DataFrame) -> list[str]:
        return ["roll", *SUBJECTS] + [col for col in OPTIONAL_FEE_COLUMNS if col in dataframe.columns]

    @staticmethod
    def _clean_text(value: object) -> str:
        if value is None or pd.isna(value):
            return ""
        return str(value).strip()

    @staticmethod
    def _normalize_columns(dataframe: pd.DataFrame) -> pd.DataFrame:
        normalized = {}
        for column in dataframe.columns:
            new_name = str(column).strip().lower()
            normalized[column] = ROLL_ALIASES.get(new_name, new_name)
        return dataframe.rename(columns=normalized)
