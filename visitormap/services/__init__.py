"""Services layer - log analytics, geolocation and visitor tracking."""
