"""
API Field Constants

Raw JSON keys used by the Parcel API in request payloads and responses.
"""


class APIFields:
    """API field key constants for request/response parsing."""

    # Envelope
    DETAILS = "details"
    MESSAGE = "message"
    STATUS = "status"

    # Hub info
    TOTAL_SALES = "totalSales"
    MUSIC_ID = "musicId"

    # Hub description / terms
    LONG_DESCRIPTION = "long_description"
    SHORT_DESCRIPTION = "short_description"
    TERMS = "terms"

    # Products
    HUB_ID = "hubId"
    PRODUCT = "product"
    PRODUCTS = "products"
    OWNED_PRODUCTS = "ownedProducts"

    # Product object
    NAME = "name"
    DESCRIPTION = "description"
    DECAL_ID = "decalID"
    CATEGORY = "category"
    TAGS = "tags"
    STOCK = "stock"
    PRODUCT_ID = "productID"
    DEVPRODUCT_ID = "devproduct_id"
    PACKABLES = "packables"

    # Packables object
    DELIVERY = "delivery"
    DISPLAY_ROBUX = "display_robux"
    ONSALE_USD = "onsale_usd"
    PRICE_IN_USD = "price_in_usd"
    STRIPE = "stripe"

    # Player profile
    DISCORD_ID = "discordID"
    VERIFIED = "verified"
    ROBLOX_ID = "robloxID"
    DISCORD_TAG = "discordTag"
