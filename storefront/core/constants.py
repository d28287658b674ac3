"""Core constants: remote document paths, local store keys and view routes.

Firestore has no DDL. Collections and documents appear on first write;
these constants are the single source of truth for where things live.
"""

# Remote document store paths
COLLECTION_SETTINGS = "settings"
COLLECTION_SERVICES = "services"

DOC_SITE_SETTINGS = f"{COLLECTION_SETTINGS}/site"
DOC_PAYMENT_SETTINGS = f"{COLLECTION_SETTINGS}/payment"
DOC_MEDIA_HOST = f"{COLLECTION_SETTINGS}/cloudinary"

FIELD_MEDIA_HOST_NAME = "cloudName"
FIELD_CREATED_AT = "createdAt"

# Local store keys
LOCAL_KEY_CONNECTION_CONFIG = "firebaseConfig"
LOCAL_KEY_MEDIA_HOST_NAME = "cloudinaryName"
LOCAL_KEY_THEME = "theme"
LOCAL_KEY_IDENTITY_SESSION = "identitySession"

# View routes used for access-gate redirects
ROUTE_SIGN_IN = "/auth"
ROUTE_ADMIN = "/admin"
ROUTE_DASHBOARD = "/dashboard"
