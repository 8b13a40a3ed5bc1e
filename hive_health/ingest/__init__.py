from hive_health.ingest.record_parser import (
    InspectionRejectedError,
    parse_inspection,
    parse_inspections,
)

__all__ = ["InspectionRejectedError", "parse_inspection", "parse_inspections"]
