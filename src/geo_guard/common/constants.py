"""Centralized constants for GeoGuard."""


# ===== GEOMETRY =====
class GeoConstants:
    EARTH_RADIUS_KM = 6371.0
    MILLIS_PER_HOUR = 60 * 60 * 1000
    METERS_PER_KM = 1000.0


# ===== RETENTION & WINDOWS =====
class LedgerConstants:
    MAX_SESSIONS_PER_USER = 50
    MAX_LOGIN_ATTEMPTS = 500
    ACTIVE_SESSION_WINDOW_HOURS = 24
    RECENT_SESSION_WINDOW_HOURS = 24


# ===== DETECTION =====
class DetectionConstants:
    MAX_TRAVEL_SPEED_KMH = 900.0  # commercial jet ceiling
    MAX_CONCURRENT_LOCATIONS = 2
    LOCATION_TOLERANCE_KM = 1.0

    REASON_WITHIN_ACCURACY = "within accuracy radius"
    REASON_TRAVEL_PLAUSIBLE = "travel plausible"
    REASON_INVALID_CREDENTIALS = "Invalid credentials"


# ===== REPORTING =====
class ReportingConstants:
    SUMMARY_WINDOW_HOURS = 24
    TOP_SUSPICIOUS_USERS = 5
    DAILY_SUMMARY_HOUR = 9


# ===== NOTIFICATIONS =====
class NotificationConstants:
    SMTP_HOST = "smtp.gmail.com"
    SMTP_PORT = 587
    SMTP_TIMEOUT_SECONDS = 10.0
