"""
Schemas
File: transfer.py

Purpose: Result model for dataset imports.
"""

from pydantic import BaseModel, ConfigDict, Field


BASE_IMPORT_MESSAGE = "Data imported successfully"


class ImportOutcome(BaseModel):
    """
    Outcome of a single import call.

    Counters are accumulated while attachments are processed; a skipped
    attachment never fails the import, it only shows up here.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True)
    message: str = Field(default=BASE_IMPORT_MESSAGE)
    imported_docs_count: int = Field(default=0, ge=0, alias="importedDocsCount")
    missing_docs_count: int = Field(default=0, ge=0, alias="missingDocsCount")
    checksum_errors: int = Field(default=0, ge=0, alias="checksumErrors")
    warnings: list[str] = Field(default_factory=list)

    def compose_message(self) -> str:
        """Base success message followed by one clause per non-zero counter."""
        details = []
        if self.imported_docs_count > 0:
            details.append(f"{self.imported_docs_count} document(s) imported")
        if self.missing_docs_count > 0:
            details.append(f"{self.missing_docs_count} document(s) were skipped due to missing files")
        if self.checksum_errors > 0:
            details.append(f"{self.checksum_errors} document(s) failed checksum validation")

        message = BASE_IMPORT_MESSAGE
        if details:
            message += f". {', '.join(details)}."
        return message


__all__ = [
    "BASE_IMPORT_MESSAGE",
    "ImportOutcome",
]
