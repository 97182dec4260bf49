"""Remote API endpoint paths (V2 HTTP API)."""

# Public quote/booking
QUOTES = "/v2/quotes"
QUOTES_SAVE = "/v2/quotes/save"
BOOKINGS = "/v2/bookings"
VEHICLE_TYPES = "/v2/vehicle-types"
ZONE_PRICING = "/v2/zone-pricing"
LOCATIONS = "/v2/locations"
LOCATIONS_PLACE_DETAILS = "/v2/locations/place-details"

# Corporate auth
CORPORATE_MAGIC_LINK = "/v2/corporate/auth/magic-link"
CORPORATE_VERIFY = "/v2/corporate/auth/verify"
CORPORATE_SESSION = "/v2/corporate/auth/session"
CORPORATE_LOGIN = "/v2/corporate/auth/login"
CORPORATE_SET_PASSWORD = "/v2/corporate/auth/set-password"
CORPORATE_FORGOT_PASSWORD = "/v2/corporate/auth/forgot-password"
CORPORATE_LOGOUT = "/v2/corporate/auth/logout"

# Corporate portal
CORPORATE_ME = "/v2/corporate/me"
CORPORATE_NOTIFICATIONS = "/v2/corporate/me/notifications"
CORPORATE_TRIPS = "/v2/corporate/me/trips"
CORPORATE_DASHBOARD = "/v2/corporate/dashboard"
CORPORATE_COMPANY = "/v2/corporate/company"
CORPORATE_USERS = "/v2/corporate/users"
CORPORATE_PASSENGERS = "/v2/corporate/passengers"
CORPORATE_PREFERENCES = "/v2/corporate/preferences"
CORPORATE_LOGO = "/v2/corporate/preferences/logo"

# Chat assistant
CHAT_SESSION = "/v2/chat/session"
CHAT_MESSAGE = "/v2/chat/message"

# Driver portal
DRIVER_REGISTER = "/v2/driver/auth/register"
DRIVER_LOGIN = "/v2/driver/auth/login"
DRIVER_MAGIC_LINK = "/v2/driver/auth/magic-link"
DRIVER_VERIFY = "/v2/driver/auth/verify"
DRIVER_SESSION = "/v2/driver/auth/session"
DRIVER_LOGOUT = "/v2/driver/auth/logout"
DRIVER_PROFILE = "/v2/driver/profile"
DRIVER_VEHICLES = "/v2/driver/vehicles"
