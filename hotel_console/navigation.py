"""Admin console navigation tree, the default source of the page catalog."""


def _item(path: str, label: str, *children: dict) -> dict:
    node = {"path": path, "label": label}
    if children:
        node["children"] = list(children)
    return node


NAV_ITEMS: list[dict] = [
    _item("/dashboard", "Welcome"),
    _item(
        "/reservations",
        "Reservations",
        _item("/reservations/reserve", "Reserve Room"),
        _item("/reservations/history", "History"),
    ),
    _item("/customers", "Manage Guest"),
    _item(
        "/invoicing",
        "Invoicing",
        _item("/invoicing/bill", "Bill"),
        _item("/invoicing/receipts", "Receipts"),
        _item("/invoicing/refunds", "Refunds"),
    ),
    _item(
        "/rooms",
        "Rooms",
        _item("/rooms/all", "All Rooms"),
        _item("/rooms/view-type", "View Type"),
        _item("/rooms/amenities", "Amenities"),
        _item("/rooms/areas", "Room Areas"),
        _item("/rooms/types", "Room Types"),
        _item("/rooms/price", "Price"),
        _item("/rooms/stay-types", "Stay Types"),
        _item("/rooms/meal-plan", "Meal Plan"),
    ),
    _item(
        "/housekeeping",
        "Housekeeping",
        _item("/housekeeping/manager", "Manager"),
        _item("/housekeeping/housekeeper", "Housekeeper"),
    ),
    _item(
        "/channels",
        "Channels",
        _item("/channels/reservation-type", "Reservation Type"),
        _item("/channels/seasonal", "Seasonal"),
        _item("/channels/stay-type", "Stay Type"),
        _item("/channels/price-grid", "Channel Price"),
    ),
    _item(
        "/pricing",
        "Pricing",
        _item("/pricing/channel", "Channel Pricing"),
        _item("/pricing/seasonal", "Seasonal Pricing"),
    ),
    _item("/tax", "Tax"),
    _item(
        "/policies",
        "Policies",
        _item("/policies/child", "Child Policies"),
        _item("/policies/cancellation", "Cancellation Policies"),
    ),
    _item("/currency", "Currency Rate"),
    _item(
        "/settings",
        "Settings",
        _item("/settings/hotels", "Hotel"),
        _item("/settings/roles", "Role Management"),
        _item("/settings/hotel-privileges", "Hotel Privileges"),
        _item("/settings/hotel-role-privileges", "Hotel Role Privileges"),
        _item("/settings/users", "User"),
        _item("/settings/user-privileges", "User Privileges"),
        _item("/settings/email-config", "Email Configuration"),
    ),
]
