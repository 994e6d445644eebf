"""Password schemas."""
from pydantic import BaseModel, Field, model_validator


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    new_password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.new_password_confirmation:
            raise ValueError("New password and its confirmation do not match")
        return self


class PasswordCheckRequest(BaseModel):
    password: str = Field(..., min_length=1)
