"""iOS simulator development from an .xcodeproj."""

workflow = {
    "name": "iOS Simulator Project Development",
    "description": (
        "Complete iOS development workflow for .xcodeproj files targeting "
        "simulators. Build apps and manage simulators."
    ),
    "platforms": ["iOS"],
    "targets": ["simulator"],
    "project_types": ["project"],
    "capabilities": ["build", "simulator-management"],
}
