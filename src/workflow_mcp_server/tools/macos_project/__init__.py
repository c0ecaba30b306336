"""macOS development from an .xcodeproj."""

workflow = {
    "name": "macOS Project Development",
    "description": "Build macOS apps from .xcodeproj files.",
    "platforms": ["macOS"],
    "targets": ["native"],
    "project_types": ["project"],
    "capabilities": ["build"],
}
