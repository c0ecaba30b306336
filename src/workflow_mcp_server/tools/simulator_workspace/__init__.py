"""iOS simulator development from an .xcworkspace."""

workflow = {
    "name": "iOS Simulator Workspace Development",
    "description": (
        "Complete iOS development workflow for .xcworkspace files (CocoaPods, "
        "SPM) targeting simulators. Build, run and manage simulators."
    ),
    "platforms": ["iOS"],
    "targets": ["simulator"],
    "project_types": ["workspace"],
    "capabilities": ["build", "run", "simulator-management"],
}
