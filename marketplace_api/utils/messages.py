"""
User-facing response messages.
Every envelope message the API emits is defined here so clients can rely on stable wording.
"""


class ErrorMessages:
    """Messages for failed requests."""

    INTERNAL_SERVER_ERROR = "Internal server error: "
    ROUTE_DOES_NOT_EXIST = "Route does not exist."
    METHOD_NOT_ALLOWED = "Method not allowed for this route."
    REQUEST_VALIDATION_FAILED = "Request validation failed."
    NO_UPDATE_FIELDS = "No valid fields provided for update."

    # Password
    PASSWORD_RESET_NO_PASSWORD = "Please provide a new password."
    PASSWORD_RESET_NO_EMAIL = "Please provide an email address."
    PASSWORD_RESET_NO_USER = "No user found with this email address."
    PASSWORD_UNAUTHORIZED = "Unauthorized to reset this password."

    # Listings
    LISTING_NOT_FOUND = "Listing not found."
    LISTING_NOT_AUTHORIZED = "User is not authorized to access this listing."
    LISTING_INVALID_REQUEST = "Invalid request: please provide a valid listing."

    # Users
    USER_MISSING_FIELDS = "Please provide a valid first name, last name, email, and password."
    USER_EMAIL_IN_USE = "An account already exists with this email."
    USER_NOT_FOUND = "User not found."
    USER_INVALID_REQUEST = "Invalid request: please provide a valid user ID."

    # Favorites
    FAVORITE_NOT_FOUND = "Favorite not found."
    FAVORITE_ALREADY_EXISTS = "Listing is already in favorites."
    FAVORITE_NOT_AUTHORIZED = "User is not authorized to access this favorite."
    FAVORITE_INVALID_REQUEST = "Invalid request: please provide a valid favorite."

    # Authentication
    AUTH_NO_EMAIL_MATCH = "No account exists with this email, check email was entered correctly."
    AUTH_NO_PASSWORD_MATCH = "Password does not match, check it was entered correctly."
    AUTH_NO_TOKEN = "No token provided, authorization denied."
    AUTH_INVALID_TOKEN = "Invalid token bearer, authorization denied."
    AUTH_INVALID_JWT_SECRET = "Internal server error: JWT_SECRET is not defined."

    # Upload
    UPLOAD_NO_FILE = "No file uploaded."


class SuccessMessages:
    """Messages for successful requests."""

    # Authentication
    USER_REGISTERED = "User registered successfully."
    USER_LOGGED_IN = "User logged in successfully."

    # Account / users
    ACCOUNT_RETRIEVED = "Account retrieved successfully."
    ACCOUNT_UPDATED = "Account updated successfully."
    ACCOUNT_DELETED = "Account deleted successfully."
    PASSWORD_RESET = "Password reset successfully."
    USERS_RETRIEVED = "Users retrieved successfully."
    USER_RETRIEVED = "User retrieved successfully."
    NO_USERS_CREATED = "No users have been created yet."

    # Listings
    LISTING_CREATED = "Listing created successfully."
    LISTINGS_RETRIEVED = "Listings retrieved successfully."
    LISTING_RETRIEVED = "Listing retrieved successfully."
    LISTING_UPDATED = "Listing updated successfully."
    LISTING_DELETED = "Listing deleted successfully."
    NO_LISTINGS_CREATED = "No listings have been created yet."
    USER_LISTINGS_RETRIEVED = "User listings retrieved successfully."
    USER_HAS_NO_LISTINGS = "User has no listings."

    # Favorites
    FAVORITE_ADDED = "Listing added to favorites."
    FAVORITES_RETRIEVED = "Favorites retrieved successfully."
    FAVORITE_RETRIEVED = "Favorite retrieved successfully."
    FAVORITE_REMOVED = "Listing removed from favorites."
    NO_FAVORITES = "No favorites yet."

    # Upload
    IMAGE_RECEIVED = "Image received successfully."
