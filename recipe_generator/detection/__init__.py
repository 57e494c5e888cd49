"""
Image-based ingredient detection.

Responsibilities:
- Manage Clarifai API configuration and credentials.
- Validate uploaded images before they leave the server.
- Forward images to the Clarifai food model and keep confident labels.
- Map every failure to a distinct user-facing message instead of raising.
"""
