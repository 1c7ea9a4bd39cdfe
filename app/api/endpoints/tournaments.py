from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import BackendError
from app.schemas import auth_schemas, participant_schemas, tournament_schemas
from app.services import participant_service, tournament_service
from app.services.backend import BackendClient
from app.api.dependencies import get_auth_state, get_backend, require_user

router = APIRouter()

def _get_tournament_or_404(backend: BackendClient, tournament_id: str) -> tournament_schemas.Tournament:
    try:
        tournament = tournament_service.get_tournament(backend, tournament_id)
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if not tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")
    return tournament

@router.get("/", response_model=tournament_schemas.TournamentListing)
async def get_tournaments_endpoint(
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    return tournament_service.build_listing(backend, auth_state)

@router.post("/", response_model=tournament_schemas.Tournament, status_code=status.HTTP_201_CREATED)
async def create_tournament_endpoint(
    form: tournament_schemas.TournamentForm,
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    try:
        return tournament_service.create_tournament(backend, auth_state, form)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

@router.get("/{tournament_id}", response_model=tournament_schemas.TournamentCard)
async def get_tournament_endpoint(
    tournament_id: str,
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    """One tournament with its ranked roster and whether the viewer may register."""
    tournament = _get_tournament_or_404(backend, tournament_id)
    participants = participant_service.load_participants(backend, tournament.id)
    return tournament_service.build_card(tournament, participants, auth_state.user_id)

@router.put("/{tournament_id}", response_model=tournament_schemas.Tournament)
async def update_tournament_endpoint(
    tournament_id: str,
    form: tournament_schemas.TournamentForm,
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    try:
        updated_tournament = tournament_service.update_tournament(backend, auth_state, tournament_id, form)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if not updated_tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")
    return updated_tournament

@router.get("/{tournament_id}/participants", response_model=participant_schemas.ParticipantList)
async def get_participants_endpoint(tournament_id: str, backend: BackendClient = Depends(get_backend)):
    return participant_service.load_participants(backend, tournament_id)

@router.post("/{tournament_id}/registration", response_model=participant_schemas.RosterResult)
async def register_endpoint(
    tournament_id: str,
    auth_state: auth_schemas.AuthState = Depends(require_user),
    backend: BackendClient = Depends(get_backend),
):
    tournament = _get_tournament_or_404(backend, tournament_id)
    try:
        tournament_service.ensure_registration_open(tournament)
        return participant_service.self_register(backend, tournament.id, auth_state.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

@router.delete("/{tournament_id}/registration", response_model=participant_schemas.RosterResult)
async def withdraw_endpoint(
    tournament_id: str,
    auth_state: auth_schemas.AuthState = Depends(require_user),
    backend: BackendClient = Depends(get_backend),
):
    tournament = _get_tournament_or_404(backend, tournament_id)
    try:
        tournament_service.ensure_registration_open(tournament)
        return participant_service.self_withdraw(backend, tournament.id, auth_state.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

@router.post("/{tournament_id}/participants", response_model=participant_schemas.RosterResult)
async def add_participant_endpoint(
    tournament_id: str,
    request: participant_schemas.AddParticipantRequest,
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    """Organizers enroll any player, regardless of the registration window."""
    tournament = _get_tournament_or_404(backend, tournament_id)
    try:
        return participant_service.admin_add(backend, auth_state, tournament.id, request.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

@router.delete("/{tournament_id}/participants/{user_id}", response_model=participant_schemas.RosterResult)
async def remove_participant_endpoint(
    tournament_id: str,
    user_id: str,
    auth_state: auth_schemas.AuthState = Depends(get_auth_state),
    backend: BackendClient = Depends(get_backend),
):
    tournament = _get_tournament_or_404(backend, tournament_id)
    try:
        return participant_service.admin_remove(backend, auth_state, tournament.id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
