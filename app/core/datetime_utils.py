from datetime import datetime, timezone

UTC = timezone.utc


def get_now_utc() -> datetime:
    """현재 시각을 UTC로 반환합니다."""
    return datetime.now(UTC)


def to_iso_utc(dt: datetime) -> str:
    """datetime 객체를 UTC ISO-8601 문자열로 변환합니다."""
    return dt.astimezone(UTC).isoformat()
