"""GreenWorld environmental impact platform API."""
