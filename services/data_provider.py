"""
Test data provider for JSON, CSV and Excel fixture files.

All fixture files live under a single data directory (tests/data by default).
Readers are stateless: every call goes back to disk and returns a fresh
structure, so repeated reads within a run always agree and a test that
mutates its records cannot leak changes into another test.
"""

import csv
import json
import logging
import os
import random
import time
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd
from faker import Faker

from config.settings import TEST_CONFIG

logger = logging.getLogger(__name__)

# Initialize faker for realistic names
fake = Faker()

RANDOM_EMAIL_DOMAIN = 'ejemplo.com'
PHONE_COUNTRY_CODE = '+57'

Record = Dict[str, Any]


class DataProviderError(Exception):
    """Base class for fixture data failures."""
    pass


class DataFileNotFoundError(DataProviderError, FileNotFoundError):
    """Raised when a requested fixture file does not exist."""
    pass


class DataParseError(DataProviderError, ValueError):
    """Raised when a fixture file exists but its content cannot be parsed."""
    pass


class SheetNotFoundError(DataProviderError, LookupError):
    """Raised when a workbook has no sheet with the requested name."""

    def __init__(self, sheet_name, available_sheets):
        self.sheet_name = sheet_name
        self.available_sheets = list(available_sheets)
        super().__init__(
            f"Sheet not found: {sheet_name!r} (available: {', '.join(self.available_sheets) or 'none'})"
        )


class UnsupportedFormatError(DataProviderError, ValueError):
    """Raised when read_data is asked for a file type it cannot dispatch."""
    pass


class DataProvider:
    """Uniform access to structured test data regardless of on-disk format."""

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir or TEST_CONFIG['data_dir']

    def resolve_path(self, filename: str) -> str:
        """Resolve a file name against the data directory; absolute paths pass through."""
        if os.path.isabs(filename):
            return filename
        return os.path.join(self.data_dir, filename)

    def _existing_path(self, filename: str) -> str:
        file_path = self.resolve_path(filename)
        if not os.path.isfile(file_path):
            raise DataFileNotFoundError(f"Data file not found: {file_path}")
        return file_path

    def read_json(self, filename: str) -> Any:
        """
        Read records from a JSON file.

        Args:
            filename: File name relative to the data directory

        Returns:
            Parsed JSON content (normally a list of records)

        Raises:
            DataFileNotFoundError: If the file does not exist
            DataParseError: If the file is not valid JSON
        """
        file_path = self._existing_path(filename)

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataParseError(f"Malformed JSON in {file_path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(f"Cannot decode {file_path} as UTF-8: {e}") from e

        logger.debug(f"Loaded JSON data from {file_path}")
        return data

    def iter_csv(self, filename: str) -> Iterator[Dict[str, str]]:
        """
        Stream records from a CSV file, one dict per row keyed by the header.

        The existence check happens on the first iteration step; errors raised
        while streaming are reported as DataParseError.
        """
        file_path = self._existing_path(filename)

        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            try:
                for row in reader:
                    yield row
            except (csv.Error, UnicodeDecodeError) as e:
                raise DataParseError(f"Failed reading {file_path} near line {reader.line_num}: {e}") from e

    def read_csv(self, filename: str) -> List[Dict[str, str]]:
        """Read all records from a CSV file. Values are kept as strings."""
        records = list(self.iter_csv(filename))
        logger.info(f"Loaded {len(records)} records from CSV {filename}")
        return records

    def read_excel(self, filename: str, sheet_name: Optional[str] = None) -> List[Record]:
        """
        Read records from an Excel workbook.

        Args:
            filename: Workbook file name relative to the data directory
            sheet_name: Sheet to read; the first sheet when omitted or empty

        Returns:
            One dict per row keyed by the header row; empty cells become None

        Raises:
            DataFileNotFoundError: If the workbook does not exist
            SheetNotFoundError: If the requested sheet is missing
            DataParseError: If the workbook cannot be opened
        """
        file_path = self._existing_path(filename)

        try:
            with pd.ExcelFile(file_path) as workbook:
                sheet_names = workbook.sheet_names
                sheet = sheet_name or (sheet_names[0] if sheet_names else None)
                if sheet is None or sheet not in sheet_names:
                    raise SheetNotFoundError(sheet, sheet_names)
                frame = workbook.parse(sheet)
        except DataProviderError:
            raise
        except Exception as e:
            raise DataParseError(f"Cannot read workbook {file_path}: {e}") from e

        frame = frame.astype(object).where(pd.notna(frame), None)
        records = frame.to_dict(orient='records')
        logger.info(f"Loaded {len(records)} records from sheet {sheet!r} of {filename}")
        return records

    def read_data(self, filename: str, **kwargs) -> Any:
        """Read a data file, dispatching on its extension."""
        extension = os.path.splitext(filename)[1].lower()
        if extension == '.json':
            return self.read_json(filename)
        if extension == '.csv':
            return self.read_csv(filename)
        if extension in ('.xlsx', '.xls'):
            return self.read_excel(filename, **kwargs)
        raise UnsupportedFormatError(f"Unsupported data file format: {filename}")

    def get_user_data(self, environment: str = 'test') -> List[Record]:
        """Get the user records for an environment (users-<environment>.json)."""
        return self.read_json(f"users-{environment}.json")

    def get_module_test_data(self, module_name: str) -> List[Record]:
        """
        Get the test data of an ERP module (<module_name>-testdata.json).

        A missing file raises DataFileNotFoundError; callers that treat
        missing module data as "no data" catch it themselves.
        """
        return self.read_json(f"{module_name}-testdata.json")

    @staticmethod
    def generate_random_data(kind: str) -> str:
        """
        Generate a synthetic value for negative-path form input.

        Values are timestamp-seeded and not reproducible. Two calls in the
        same millisecond may return the same value.

        Args:
            kind: email, phone, name, company or document; anything else
                yields a generic data<timestamp> string
        """
        timestamp = int(time.time() * 1000)  # Millisecond precision

        if kind == 'email':
            return f"test{timestamp}@{RANDOM_EMAIL_DOMAIN}"
        if kind == 'phone':
            return f"{PHONE_COUNTRY_CODE}{random.randint(1000000000, 9999999999)}"
        if kind == 'name':
            return f"{fake.first_name()}{timestamp}"
        if kind == 'company':
            return f"{fake.company().split()[0].strip(',')}{timestamp}"
        if kind == 'document':
            return str(random.randint(10000000, 99999999))
        return f"data{timestamp}"

    @staticmethod
    def field_matches(record: Record, key: str, value: Any) -> bool:
        """Compare one field. Booleans only match booleans, so 1 never matches True."""
        if key not in record:
            return False
        if isinstance(value, bool) or isinstance(record[key], bool):
            return type(record[key]) is type(value) and record[key] == value
        return record[key] == value

    @classmethod
    def filter_data(cls, records: List[Record], criteria: Dict[str, Any]) -> List[Record]:
        """Keep the records whose fields equal every criterion."""
        return [
            record for record in records
            if all(cls.field_matches(record, key, value) for key, value in criteria.items())
        ]

    @staticmethod
    def validate_data_structure(records: List[Record], required_fields: List[str]) -> bool:
        """
        Check that records is non-empty and every record has all required fields.

        A field counts as present when its key exists, even if it holds None.
        """
        if not isinstance(records, list) or not records:
            return False

        return all(
            isinstance(record, dict) and all(field in record for field in required_fields)
            for record in records
        )

    def create_sample_data_file(self, filename: str, records: Any) -> str:
        """
        Write records to a pretty-printed JSON file, replacing any existing file.

        Returns:
            Path of the written file
        """
        file_path = self.resolve_path(filename)
        os.makedirs(os.path.dirname(file_path) or '.', exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(records, f, indent=2, ensure_ascii=False)

        logger.info(f"Wrote sample data file {file_path}")
        return file_path

    def delete_data_file(self, filename: str) -> bool:
        """Remove a data file created during a test. Returns False if it was absent."""
        file_path = self.resolve_path(filename)
        if not os.path.exists(file_path):
            return False
        os.remove(file_path)
        logger.info(f"Removed data file {file_path}")
        return True


def create_data_provider(data_dir: Optional[str] = None) -> DataProvider:
    """
    Factory function to create a DataProvider instance.

    Args:
        data_dir: Directory holding fixture files; TEST_CONFIG['data_dir'] when omitted

    Returns:
        DataProvider instance
    """
    return DataProvider(data_dir)
