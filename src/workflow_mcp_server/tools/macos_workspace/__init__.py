"""macOS development from an .xcworkspace."""

workflow = {
    "name": "macOS Workspace Development",
    "description": "Build and test macOS apps from .xcworkspace files.",
    "platforms": ["macOS"],
    "targets": ["native"],
    "project_types": ["workspace"],
    "capabilities": ["build", "test"],
}
