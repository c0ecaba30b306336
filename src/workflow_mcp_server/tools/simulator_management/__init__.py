"""Simulator management without a project."""

workflow = {
    "name": "Simulator Management",
    "description": (
        "Tools for managing iOS simulators outside a project: list available "
        "simulators, boot them, and open the Simulator app."
    ),
    "platforms": ["iOS"],
    "targets": ["simulator"],
    "capabilities": ["simulator-management"],
}
