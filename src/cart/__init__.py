"""Cart Restful Web Service."""
