"""Environment checks for the developer toolchain."""

workflow = {
    "name": "Diagnostics",
    "description": (
        "Check the local toolchain: Xcode, command line tools and Swift "
        "versions. Use when builds fail for environment reasons."
    ),
    "platforms": ["iOS", "macOS"],
    "capabilities": ["diagnostics"],
}
