from sitebuilder.models.restaurant import Restaurant
from sitebuilder.models.restaurant_website import RestaurantWebsite

__all__ = [
    "Restaurant",
    "RestaurantWebsite",
]
