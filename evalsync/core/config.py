from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_URL: str = "http://localhost:3001"
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    LOG_LEVEL: str = "INFO"

    # fixed interval, no backoff
    POLL_INTERVAL_SECONDS: float = 3.0

    class Config:
        env_prefix = "EVALSYNC_"
        env_file = ".env"
        env_file_encoding = "utf-8"


# Grade histogram thresholds, checked top-down on percentageScore
GRADE_THRESHOLDS = (("A", 90), ("B", 80), ("C", 70), ("D", 60))
FAILING_GRADE = "F"

PDF_CONTENT_TYPE = "application/pdf"

# Export endpoints and the local file name they are saved under
EXPORT_FORMATS = {
    "csv": ("/export/marks-sheet/{assignment_id}", "marks-sheet-{assignment_id}.csv"),
    "xlsx": ("/export/marks-sheet-excel/{assignment_id}", "marks-sheet-{assignment_id}.xlsx"),
}

AUTH_PATH_PREFIX = "/auth/"
