from dataclasses import dataclass


@dataclass(frozen=True)
class ImportConfig:
    """
    Configuration for the inventory CSV import.
    """

    id_prefix: str = "TOF-BG-"
    id_width: int = 4
    encoding: str = "utf-8"
    progress_every: int = 10

    def fallback_id(self, row_number: int) -> str:
        return f"{self.id_prefix}{row_number:0{self.id_width}d}"


DEFAULT_IMPORT_CONFIG = ImportConfig()
