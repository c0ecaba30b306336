"""Parameter models and command lines shared by the xcodebuild tools."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class WorkspaceBuildParams(BaseModel):
    workspace_path: str = Field(description="Path to the .xcworkspace file")
    scheme: str = Field(description="Scheme to build")
    configuration: str = Field(default="Debug", description="Build configuration")
    derived_data_path: Optional[str] = Field(default=None, description="DerivedData directory")
    extra_args: List[str] = Field(default_factory=list, description="Extra xcodebuild arguments")

    model_config = {"extra": "forbid"}

    @field_validator("workspace_path")
    @classmethod
    def validate_workspace_path(cls, v: str) -> str:
        if not v.endswith(".xcworkspace"):
            raise ValueError("workspace_path must point to a .xcworkspace")
        return v


class ProjectBuildParams(BaseModel):
    project_path: str = Field(description="Path to the .xcodeproj file")
    scheme: str = Field(description="Scheme to build")
    configuration: str = Field(default="Debug", description="Build configuration")
    derived_data_path: Optional[str] = Field(default=None, description="DerivedData directory")
    extra_args: List[str] = Field(default_factory=list, description="Extra xcodebuild arguments")

    model_config = {"extra": "forbid"}

    @field_validator("project_path")
    @classmethod
    def validate_project_path(cls, v: str) -> str:
        if not v.endswith(".xcodeproj"):
            raise ValueError("project_path must point to a .xcodeproj")
        return v


class SimulatorWorkspaceParams(WorkspaceBuildParams):
    simulator_id: str = Field(description="UDID of the target simulator (see list_sims)")


class SimulatorProjectParams(ProjectBuildParams):
    simulator_id: str = Field(description="UDID of the target simulator (see list_sims)")


def xcodebuild_command(
    *,
    scheme: str,
    configuration: str,
    destination: str,
    workspace_path: Optional[str] = None,
    project_path: Optional[str] = None,
    derived_data_path: Optional[str] = None,
    extra_args: Optional[List[str]] = None,
    action: Optional[str] = "build",
) -> List[str]:
    command = ["xcodebuild"]
    if workspace_path:
        command += ["-workspace", workspace_path]
    elif project_path:
        command += ["-project", project_path]
    command += [
        "-scheme", scheme,
        "-configuration", configuration,
        "-destination", destination,
        "-skipMacroValidation",
    ]
    if derived_data_path:
        command += ["-derivedDataPath", derived_data_path]
    command += list(extra_args or [])
    if action:
        command.append(action)
    return command


def simulator_destination(simulator_id: str) -> str:
    return f"platform=iOS Simulator,id={simulator_id}"


MACOS_DESTINATION = "platform=macOS"
