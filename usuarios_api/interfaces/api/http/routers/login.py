"""
===============================================================================
TARJETA CRC — routers/login.py
===============================================================================

Responsibilities:
    - POST /api/login/authenticate {Email} -> {Token, Perfil, Modulos}.
    - Mapear UsuarioError -> HTTP (401 para usuario inexistente/inactivo).

Collaborators:
    - AutenticarUsuarioUseCase
    - schemas.login
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from usuarios_api.application.usecases import AutenticarUsuarioUseCase
from usuarios_api.container import get_autenticar_usuario_use_case
from usuarios_api.context import RequestContext
from usuarios_api.crosscutting.error_responses import Respuesta, exito

from ..dependencies import get_request_context
from ..error_mapping import raise_usuario_error
from ..schemas.login import LoginReq, LoginRes, ModuloDto, PerfilDto

router = APIRouter(prefix="/api/login", tags=["login"])


@router.post("/authenticate", response_model=Respuesta[LoginRes])
def authenticate(
    req: LoginReq,
    use_case: AutenticarUsuarioUseCase = Depends(get_autenticar_usuario_use_case),
    ctx: RequestContext = Depends(get_request_context),
):
    result = use_case.execute(req.email or "", ctx=ctx)
    if result.error is not None:
        raise_usuario_error(result.error)

    return exito(
        "Inicio de sesión exitoso.",
        LoginRes(
            token=result.token,
            perfil=PerfilDto.from_entity(result.perfil),
            modulos=(
                [ModuloDto.from_entity(m) for m in result.modulos]
                if result.modulos
                else None
            ),
        ),
    )
