from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


# Create request; required fields are checked by the route so blanks get a clear 400
class ScreeningIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    job_title: Optional[str] = Field(None, alias="jobTitle")
    company_name: Optional[str] = Field(None, alias="companyName")
    job_description: Optional[str] = Field(None, alias="jobDescription")
    candidate_name: Optional[str] = Field(None, alias="candidateName")
    candidate_email: Optional[str] = Field(None, alias="candidateEmail")
    prompt: Optional[str] = None


class CandidateInfoIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidate_name: Optional[str] = Field(None, alias="candidateName")
    candidate_email: Optional[str] = Field(None, alias="candidateEmail")


# One conversation turn; role is passed through to the model API unchecked
class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str
    # null for tool-call turns, or a list of content parts
    content: Optional[Any] = None


class RespondIn(BaseModel):
    messages: List[ChatMessage]


class ReplyOut(BaseModel):
    role: str
    content: Optional[str] = None


class RespondOut(BaseModel):
    reply: ReplyOut


class PromptOut(BaseModel):
    prompt: str


class SuccessOut(BaseModel):
    success: bool = True


# Full record, as returned by the store and the debug listing
class ScreeningOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    prompt: str
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    job_description: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    created_at: datetime
