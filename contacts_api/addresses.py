"""Address routes nested under a contact."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from . import crud, errors, schemas
from .contacts import get_owned_contact
from .database import get_db

router = APIRouter(prefix="/api/contacts/{contact_id}/addresses", tags=["addresses"])


def get_owned_address(
    address_id: int,
    contact=Depends(get_owned_contact),
    db: Session = Depends(get_db),
):
    """Resolve ``address_id`` within a contact owned by the current user."""
    address = crud.get_address(db, address_id, contact)
    if not address:
        raise errors.not_found()
    return address


@router.post("", response_model=schemas.AddressResponse, status_code=201)
def create_address(
    address_in: schemas.AddressCreate,
    contact=Depends(get_owned_contact),
    db: Session = Depends(get_db),
):
    """Attach a new address to the contact."""
    return {"data": crud.create_address(db, address_in, contact)}


@router.get("", response_model=schemas.AddressListResponse)
def list_addresses(
    contact=Depends(get_owned_contact),
    db: Session = Depends(get_db),
):
    """List the addresses of the contact."""
    return {"data": crud.get_addresses(db, contact)}


@router.get("/{address_id}", response_model=schemas.AddressResponse)
def get_address(address=Depends(get_owned_address)):
    return {"data": address}


@router.put("/{address_id}", response_model=schemas.AddressResponse)
def update_address(
    changes: schemas.AddressUpdate,
    address=Depends(get_owned_address),
    db: Session = Depends(get_db),
):
    """Replace the fields of an address; omitted optional fields are cleared."""
    return {"data": crud.update_address(db, address, changes.model_dump())}


@router.delete("/{address_id}", response_model=schemas.TrueResponse)
def remove_address(
    address=Depends(get_owned_address),
    db: Session = Depends(get_db),
):
    crud.delete_address(db, address)
    return schemas.TrueResponse()
