from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from leadgen.backend import constants


InteractionMode = Literal["buttons", "conversation"]
NextAction = Literal["continue", "complete", "redirect"]


class ApiError(BaseModel):
	model_config = ConfigDict(extra="forbid")

	code: str
	message: str
	evidence: List[str] = Field(default_factory=list)


class ApiEnvelope(BaseModel):
	model_config = ConfigDict(extra="allow")

	ok: bool
	generated_at: str
	request_id: Optional[str] = None
	site: Optional[str] = Field(default=None, description="Key of the site profile that served the request.")
	data: Optional[Dict[str, Any]] = None
	error: Optional[ApiError] = None


class Option(BaseModel):
	model_config = ConfigDict(extra="ignore")

	id: str = Field(..., description="Unique identifier for the option")
	text: str = Field(..., description="Button text to display")
	value: str = Field(..., description="Value to send when clicked")
	description: Optional[str] = Field(default=None, description="Optional description for the option")


class AssessmentResponse(BaseModel):
	model_config = ConfigDict(extra="ignore", populate_by_name=True)

	message: str = Field(..., description="The main response message to the user")
	current_step: str = Field(..., alias="currentStep", description="Current step in the assessment process")
	progress: int = Field(..., ge=0, le=100, description="Progress percentage (0-100)")
	options: List[Option] = Field(default_factory=list, description="Interactive options/buttons for the user")
	next_action: NextAction = Field(..., alias="nextAction", description="What should happen next")
	recommendations: Optional[List[str]] = Field(
		default=None,
		description="Specific recommendations based on user responses",
	)
	eligibility_score: Optional[int] = Field(
		default=None,
		alias="eligibilityScore",
		ge=0,
		le=100,
		description="Eligibility score if applicable",
	)

	def to_wire(self) -> Dict[str, Any]:
		return self.model_dump(by_alias=True, exclude_none=True)


class UserInfo(BaseModel):
	model_config = ConfigDict(extra="ignore")

	name: Optional[str] = None
	domain: Optional[str] = None
	history: Optional[str] = None


class ChatMessage(BaseModel):
	model_config = ConfigDict(extra="ignore")

	# Frontend SDKs also send "data"/"tool" roles and list-of-parts content;
	# provider_service.input_messages drops what the provider cannot take.
	role: str
	content: Union[str, List[Dict[str, Any]], None] = None


class AssessmentRequest(BaseModel):
	model_config = ConfigDict(extra="ignore", populate_by_name=True)

	messages: List[ChatMessage] = Field(default_factory=list)
	user_profile: Optional[Dict[str, Any]] = Field(default=None, alias="userProfile")
	model: Optional[str] = Field(default=None, description="Frontend model alias.")
	method: str = Field(default=constants.DEFAULT_METHOD, description="Elicitation method key (1-4).")
	user_info: Optional[UserInfo] = Field(default=None, alias="userInfo")
	interaction_mode: Optional[InteractionMode] = Field(default=None, alias="interactionMode")

	@field_validator("messages", mode="before")
	@classmethod
	def _null_messages_are_empty(cls, value: Any) -> Any:
		return [] if value is None else value

	@field_validator("method", mode="before")
	@classmethod
	def _coerce_method(cls, value: Any) -> str:
		if value is None:
			return constants.DEFAULT_METHOD
		return str(value).strip() or constants.DEFAULT_METHOD

	@field_validator("interaction_mode", mode="before")
	@classmethod
	def _blank_mode_is_absent(cls, value: Any) -> Any:
		if isinstance(value, str) and not value.strip():
			return None
		return value


class ChatRequest(BaseModel):
	model_config = ConfigDict(extra="ignore")

	messages: List[ChatMessage] = Field(..., min_length=1)
	model: Optional[str] = Field(default=None, description="Frontend model alias.")


class PricingSelection(BaseModel):
	model_config = ConfigDict(extra="forbid")

	phases: List[int] = Field(default_factory=list, description="Selected phase package numbers.")
	components: List[str] = Field(default_factory=list, description="Selected component identifiers.")
