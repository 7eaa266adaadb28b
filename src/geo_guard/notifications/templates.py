"""Alert email templates - separated for maintainability."""

from datetime import datetime, timezone

from geo_guard.notifications.schemas import (
    DailySummary,
    MultipleLocationsDetails,
    SuspiciousLoginDetails,
)


MAPS_URL = "https://www.google.com/maps?q={lat},{lng}"

FOOTER = "This is an automated security alert from GeoGuard."


def format_millis(timestamp_millis: int) -> str:
    return datetime.fromtimestamp(timestamp_millis / 1000, tz=timezone.utc).strftime(
        "%Y-%m-%d %H:%M:%S UTC"
    )


def render_suspicious_login(details: SuspiciousLoginDetails) -> tuple[str, str]:
    """Subject and plain-text body for a suspicious-login alert."""
    subject = f"SECURITY ALERT: Suspicious Login Detected - {details.username}"
    current = details.current_location
    lines = [
        "Suspicious Login Detected",
        "",
        f"User: {details.username}",
        f"Time: {format_millis(details.timestamp_millis)}",
        f"Reason: {details.reason}",
        f"IP Address: {details.ip_address}",
        "",
        "Current Login Location:",
        f"  Latitude: {current.latitude}",
        f"  Longitude: {current.longitude}",
        f"  Accuracy: {current.accuracy_meters} meters",
        f"  {MAPS_URL.format(lat=current.latitude, lng=current.longitude)}",
    ]
    if details.previous_location is not None:
        previous = details.previous_location
        lines += [
            "",
            "Previous Login Location:",
            f"  Latitude: {previous.latitude}",
            f"  Longitude: {previous.longitude}",
            f"  Time: {format_millis(previous.timestamp)}",
            f"  {MAPS_URL.format(lat=previous.latitude, lng=previous.longitude)}",
        ]
    lines += [
        "",
        "Please review this user's account. Consider contacting the user,",
        "temporarily suspending the account, and reviewing recent activity.",
        "",
        FOOTER,
    ]
    return subject, "\n".join(lines)


def render_multiple_locations(details: MultipleLocationsDetails) -> tuple[str, str]:
    """Subject and plain-text body for a multiple-active-locations alert."""
    subject = f"ALERT: Multiple Active Sessions - {details.username}"
    lines = [
        "Multiple Active Sessions Detected",
        "",
        f"User: {details.username}",
        f"Active Sessions: {details.active_session_count}",
        f"Different Locations: {details.location_count}",
        "",
        "Active Session Locations:",
    ]
    for index, loc in enumerate(details.locations, start=1):
        lines += [
            f"  Location {index}: {loc.lat:.4f}, {loc.lng:.4f}",
            f"    Last Active: {format_millis(loc.timestamp)}",
            f"    {MAPS_URL.format(lat=loc.lat, lng=loc.lng)}",
        ]
    lines += [
        "",
        "This could indicate account sharing, compromised credentials,",
        "or legitimate use from several devices.",
        "",
        FOOTER,
    ]
    return subject, "\n".join(lines)


def render_daily_summary(summary: DailySummary) -> tuple[str, str]:
    """Subject and plain-text body for the daily summary."""
    subject = f"Daily Security Summary - {summary.date}"
    lines = [
        f"Daily Security Summary for {summary.date}",
        "",
        f"Successful logins: {summary.total_logins}",
        f"Suspicious logins: {summary.suspicious_logins}",
        f"Failed logins: {summary.failed_logins}",
    ]
    if summary.top_suspicious_users:
        lines += ["", "Users with most suspicious activity:"]
        lines += [
            f"  {entry.username}: {entry.suspicious_count} suspicious attempts"
            for entry in summary.top_suspicious_users
        ]
    lines += ["", FOOTER]
    return subject, "\n".join(lines)
