"""Swift Package Manager packages without an Xcode project."""

workflow = {
    "name": "Swift Package Manager",
    "description": (
        "Build and test Swift packages with the Swift Package Manager. "
        "Use when there is a Package.swift and no Xcode project."
    ),
    "platforms": ["iOS", "macOS"],
    "project_types": ["swift-package"],
    "capabilities": ["build", "test"],
}
