"""Константы клиента."""

from typing import Final

# ===== CREDENTIAL STORE KEYS =====
STORAGE_ACCESS_TOKEN_KEY: Final[str] = "access_token"
STORAGE_REFRESH_TOKEN_KEY: Final[str] = "refresh_token"

# ===== SIGNUP VALIDATION =====
MIN_USERNAME_LENGTH: Final[int] = 5
MIN_PASSWORD_LENGTH: Final[int] = 8
EMAIL_PATTERN: Final[str] = r"\S+@\S+\.\S+"

# ===== TIMEOUTS =====
DEFAULT_API_TIMEOUT: Final[int] = 30

# ===== ROUTES =====
ROUTE_LOGIN: Final[str] = "Login"
ROUTE_SIGNUP: Final[str] = "Signup"
ROUTE_TAB: Final[str] = "Tab"

# ===== MEDIA =====
DEFAULT_PROFILE_IMAGE: Final[str] = "assets/app_images/profile.png"

# ===== FIELD ERRORS =====
MSG_USERNAME_NOT_PROVIDED: Final[str] = "Username not provided"
MSG_PASSWORD_NOT_PROVIDED: Final[str] = "Password not provided"
MSG_USERNAME_TOO_SHORT: Final[str] = f"Username must be >= {MIN_USERNAME_LENGTH} characters"
MSG_FIRST_NAME_MISSING: Final[str] = "First Name was not provided"
MSG_LAST_NAME_MISSING: Final[str] = "Last Name was not provided"
MSG_INVALID_EMAIL: Final[str] = "Invalid email address"
MSG_PASSWORD_TOO_SHORT: Final[str] = "Password is too short"
MSG_PASSWORDS_MISMATCH: Final[str] = "Passwords don't match"

# ===== ALERTS =====
ALERT_TITLE_ERROR: Final[str] = "Error"
ALERT_TITLE_SUCCESS: Final[str] = "Success"
MSG_LOGIN_SUCCESS: Final[str] = "Logged in successfully!"
MSG_SIGNUP_SUCCESS: Final[str] = "Account created successfully!"
MSG_LOGIN_FAILED: Final[str] = "Failed to login."
MSG_SIGNUP_FAILED: Final[str] = "Failed to sign up."
MSG_TOKEN_MISSING: Final[str] = "Token is missing in the response."
MSG_ACCESS_TOKEN_MISSING: Final[str] = "Access token is missing in the response."
MSG_NOT_AUTHENTICATED: Final[str] = "User not authenticated."
MSG_PROFILE_LOAD_FAILED: Final[str] = "Failed to load profile data."
MSG_UPLOAD_FAILED: Final[str] = "Failed to upload image."
MSG_LOGOUT_FAILED: Final[str] = "Failed to log out."
MSG_REQUEST_FAILED: Final[str] = "Request failed."

# ===== API ENDPOINTS =====
ENDPOINT_USERS_ME: Final[str] = "/api/users/me/"
ENDPOINT_USERS_LOGIN: Final[str] = "/api/users/login/"
ENDPOINT_USERS_SIGNUP: Final[str] = "/api/users/signup/"
ENDPOINT_PROFILE_PICTURE: Final[str] = "/api/users/profile-picture/"
