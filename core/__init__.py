"""
HUD core package - portable across platforms.

Data models, the owned state container, timer lifecycle, the Answer Engine
client and the resolvers/loaders that feed the dashboard. No UI framework
dependencies.
"""
