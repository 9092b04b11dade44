from pydantic import AnyUrl, BaseModel, ConfigDict, Field
from typing import Optional

REPO_URL_MESSAGE = "Please enter a valid GitHub repository URL."

class RepoFormValues(BaseModel):
    # any scheme: ssh://, git:// and https:// clone URLs all pass
    repo_url: AnyUrl

class SubmitRequest(BaseModel):
    # left as a plain string so the form controller owns the URL check
    repo_url: str = ""

class ValidateRepoUrlInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    repo_url: str = Field(..., alias="repoUrl")

class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(..., alias="isValid")
    reason: Optional[str] = None
