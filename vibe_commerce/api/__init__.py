# vibe_commerce/api/__init__.py
