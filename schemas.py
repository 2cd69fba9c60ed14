"""
Schemas for the Equipes API

The team documents live in the `equipes` collection. Field aliases are the
keys stored in MongoDB and used on the wire by the existing clients
(nomeEquipe, categoria, tecnico, ...); request bodies may also use the
Python attribute names.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# -----------------------------
# Requests
# -----------------------------

class TeamPayload(BaseModel):
    """Body of POST /equipes and PUT /equipes/{id}.

    Everything is optional at parse time; required-field rules belong to
    the gateway so that a missing name is a 400 with a readable message.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(None, alias="nomeEquipe", description="Team name")
    category: Optional[str] = Field(None, alias="categoria", description="Age/level category, e.g. Sub-17")
    coach: Optional[str] = Field(None, alias="tecnico", description="Head coach")
    athletes: Optional[Any] = Field(None, alias="atletas", description="Athlete descriptors")
    liberos: Optional[Any] = Field(None, alias="liberos", description="Libero descriptors")
    owner_id: Optional[str] = Field(None, alias="userId", description="Opaque id of the creating user")


# -----------------------------
# Responses
# -----------------------------

class TeamRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Stringified ObjectId")
    owner_id: Optional[str] = Field(None, alias="userId")
    name: Optional[str] = Field(None, alias="nomeEquipe")
    category: Optional[str] = Field(None, alias="categoria")
    coach: Optional[str] = Field(None, alias="tecnico")
    athletes: Optional[Any] = Field(None, alias="atletas")
    liberos: Optional[Any] = Field(None, alias="liberos")
    registered_at: Optional[datetime] = Field(None, alias="dataCadastro", description="Set by the server on creation")


class MessageResponse(BaseModel):
    message: str


class CreatedResponse(MessageResponse):
    inserted_id: str = Field(..., alias="insertedId")
