"""Server-rendered connect page.

The page hosts the vendor widget and relays its events to the native app;
all widget code is loaded from the vendor CDN.
"""
