"""
===============================================================================
TARJETA CRC — routers/usuarios.py
===============================================================================

Name:
    Usuarios Router

Responsibilities:
    - Endpoints CRUD de usuarios bajo /api/usuario.
    - Traducir DTO <-> entidad y resultados -> envoltura {Estatus, Mensaje,
      ResponseObject}.
    - Mapear UsuarioError -> HTTP (error_mapping).
    - Aplicar el guard opcional de Bearer JWT (identity.auth.require_token).

Collaborators:
    - application.usecases: Listar/Obtener/Alta/Actualizar/Eliminar
    - schemas.usuarios.UsuarioDto
    - container factories
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from usuarios_api.application.usecases import (
    ActualizarUsuarioUseCase,
    AltaUsuarioUseCase,
    EliminarUsuarioUseCase,
    ListarUsuariosUseCase,
    ObtenerUsuarioUseCase,
)
from usuarios_api.container import (
    get_actualizar_usuario_use_case,
    get_alta_usuario_use_case,
    get_eliminar_usuario_use_case,
    get_listar_usuarios_use_case,
    get_obtener_usuario_use_case,
)
from usuarios_api.context import RequestContext
from usuarios_api.crosscutting.error_responses import Respuesta, exito
from usuarios_api.identity.auth import require_token

from ..dependencies import get_request_context
from ..error_mapping import raise_usuario_error
from ..schemas.usuarios import UsuarioDto

PREFIX = "/api/usuario"

router = APIRouter(
    prefix=PREFIX,
    tags=["usuarios"],
    dependencies=[Depends(require_token())],
)


def _location(id_usuario: str) -> str:
    return f"{PREFIX}/obtenerUsuario/{id_usuario}"


@router.get("/obtenerUsuarios", response_model=Respuesta[list[UsuarioDto]])
def obtener_usuarios(
    use_case: ListarUsuariosUseCase = Depends(get_listar_usuarios_use_case),
    ctx: RequestContext = Depends(get_request_context),
):
    result = use_case.execute(ctx=ctx)
    if result.error is not None:
        raise_usuario_error(result.error)

    return exito(
        "Usuarios encontrados.",
        [UsuarioDto.from_entity(u) for u in result.usuarios],
    )


@router.get("/obtenerUsuario/{id_usuario}", response_model=Respuesta[UsuarioDto])
def obtener_usuario(
    id_usuario: str,
    use_case: ObtenerUsuarioUseCase = Depends(get_obtener_usuario_use_case),
    ctx: RequestContext = Depends(get_request_context),
):
    result = use_case.execute(id_usuario, ctx=ctx)
    if result.error is not None:
        raise_usuario_error(result.error)

    return exito("Usuario encontrado.", UsuarioDto.from_entity(result.usuario))


@router.post(
    "/altaUsuario",
    response_model=Respuesta[UsuarioDto],
    status_code=status.HTTP_201_CREATED,
)
def alta_usuario(
    req: UsuarioDto,
    response: Response,
    use_case: AltaUsuarioUseCase = Depends(get_alta_usuario_use_case),
    ctx: RequestContext = Depends(get_request_context),
):
    result = use_case.execute(req.to_entity(), ctx=ctx)
    if result.error is not None:
        raise_usuario_error(result.error)

    creado = result.usuario
    response.headers["Location"] = _location(creado.id_usuario)
    return exito("Usuario creado correctamente.", UsuarioDto.from_entity(creado))


@router.patch(
    "/actualizarUsuario/{id_usuario}", response_model=Respuesta[UsuarioDto]
)
def actualizar_usuario(
    id_usuario: str,
    req: UsuarioDto,
    use_case: ActualizarUsuarioUseCase = Depends(get_actualizar_usuario_use_case),
    ctx: RequestContext = Depends(get_request_context),
):
    result = use_case.execute(id_usuario, req.to_entity(), ctx=ctx)
    if result.error is not None:
        raise_usuario_error(result.error)

    return exito(
        "Usuario actualizado correctamente.", UsuarioDto.from_entity(result.usuario)
    )


@router.delete("/eliminarUsuario/{id_usuario}", response_model=Respuesta[UsuarioDto])
def eliminar_usuario(
    id_usuario: str,
    use_case: EliminarUsuarioUseCase = Depends(get_eliminar_usuario_use_case),
    ctx: RequestContext = Depends(get_request_context),
):
    result = use_case.execute(id_usuario, ctx=ctx)
    if result.error is not None:
        raise_usuario_error(result.error)

    return exito(
        "Usuario eliminado correctamente.", UsuarioDto.from_entity(result.usuario)
    )
