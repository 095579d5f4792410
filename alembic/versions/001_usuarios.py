"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_usuarios (Alembic Migration)

Responsibilities:
  - Crear las tablas del directorio de usuarios y de menús.
  - Crear las funciones PL/pgSQL que consume el backend "sql":
    cada una devuelve UNA fila (estatus, mensaje, objeto) donde
    objeto es JSON serializado (text) o NULL.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/usuario.py (consume las funciones)
  - infrastructure/db/models.py (mismo esquema para el backend "orm")

Policy:
  - Estatus: 'S' éxito, 'W' advertencia (registro inexistente), 'E' error.
  - Lecturas: registro inexistente => 'S' con objeto NULL.
  - Escrituras: registro inexistente => 'W' con objeto NULL.
  - Errores SQL se capturan y se devuelven como 'E' con SQLERRM.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_usuarios"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# ============================================================
# Funciones (JSON con claves PascalCase, ver records.py)
# ============================================================

FN_USUARIO_JSON = """
CREATE OR REPLACE FUNCTION fn_usuario_json(p_id_usuario varchar)
RETURNS jsonb
LANGUAGE sql STABLE AS $$
    SELECT jsonb_build_object(
        'IdUsuario', u.id_usuario,
        'CorreoElectronico', u.correo_electronico,
        'NombreCompleto', u.nombre_completo,
        'IdSuperior', u.id_superior,
        'NombreSuperior', u.nombre_superior,
        'CorreoElectronicoSuperior', u.correo_electronico_superior,
        'Pais', COALESCE((
            SELECT jsonb_agg(jsonb_build_object('PaisId', p.pais_id, 'Estado', p.estado)
                             ORDER BY p.posicion)
            FROM usuario_paises p WHERE p.id_usuario = u.id_usuario
        ), '[]'::jsonb),
        'Rol', COALESCE((
            SELECT jsonb_agg(jsonb_build_object('RolId', r.rol_id, 'Estado', r.estado)
                             ORDER BY r.posicion)
            FROM usuario_roles r WHERE r.id_usuario = u.id_usuario
        ), '[]'::jsonb),
        'FechaCreacion', u.fecha_creacion,
        'FechaActualizacion', u.fecha_actualizacion,
        'Estado', u.estado
    )
    FROM usuarios u
    WHERE u.id_usuario = p_id_usuario
$$;
"""

FN_GUARDAR_ASIGNACIONES = """
CREATE OR REPLACE FUNCTION fn_guardar_asignaciones(p_id_usuario varchar, p_usuario jsonb)
RETURNS void
LANGUAGE plpgsql AS $$
BEGIN
    DELETE FROM usuario_paises WHERE id_usuario = p_id_usuario;
    DELETE FROM usuario_roles WHERE id_usuario = p_id_usuario;

    INSERT INTO usuario_paises (id_usuario, posicion, pais_id, estado)
    SELECT p_id_usuario, e.ord - 1, e.val->>'PaisId', COALESCE((e.val->>'Estado')::boolean, true)
    FROM jsonb_array_elements(COALESCE(p_usuario->'Pais', '[]'::jsonb))
         WITH ORDINALITY AS e(val, ord);

    INSERT INTO usuario_roles (id_usuario, posicion, rol_id, estado)
    SELECT p_id_usuario, e.ord - 1, e.val->>'RolId', COALESCE((e.val->>'Estado')::boolean, true)
    FROM jsonb_array_elements(COALESCE(p_usuario->'Rol', '[]'::jsonb))
         WITH ORDINALITY AS e(val, ord);
END;
$$;
"""

SP_USUARIO_COMPLETO = """
CREATE OR REPLACE FUNCTION sp_usuario_completo()
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
BEGIN
    RETURN QUERY
    SELECT 'S'::text, 'Usuarios encontrados.'::text,
           COALESCE(jsonb_agg(fn_usuario_json(u.id_usuario) ORDER BY u.fecha_creacion, u.id_usuario),
                    '[]'::jsonb)::text
    FROM usuarios u;
EXCEPTION WHEN OTHERS THEN
    RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

SP_OBTENER_USUARIO = """
CREATE OR REPLACE FUNCTION sp_obtener_usuario(p_id_usuario varchar)
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
DECLARE
    v_usuario jsonb;
BEGIN
    v_usuario := fn_usuario_json(p_id_usuario);
    IF v_usuario IS NULL THEN
        RETURN QUERY SELECT 'S'::text, 'No se ha encontrado el usuario.'::text, NULL::text;
    ELSE
        RETURN QUERY SELECT 'S'::text, 'Usuario encontrado.'::text, v_usuario::text;
    END IF;
EXCEPTION WHEN OTHERS THEN
    RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

SP_VALIDAR_USUARIO = """
CREATE OR REPLACE FUNCTION sp_validar_usuario(p_correo varchar)
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
DECLARE
    v_acceso jsonb;
BEGIN
    SELECT jsonb_build_object(
        'IdUsuario', u.id_usuario,
        'NombreCompleto', u.nombre_completo,
        'CorreoElectronico', u.correo_electronico,
        'Pais', (SELECT p.pais_id FROM usuario_paises p
                 WHERE p.id_usuario = u.id_usuario AND p.estado
                 ORDER BY p.posicion LIMIT 1),
        'Rol', (SELECT r.rol_id FROM usuario_roles r
                WHERE r.id_usuario = u.id_usuario AND r.estado
                ORDER BY r.posicion LIMIT 1),
        'Estado', u.estado
    )
    INTO v_acceso
    FROM usuarios u
    WHERE lower(u.correo_electronico) = lower(p_correo);

    IF v_acceso IS NULL THEN
        RETURN QUERY SELECT 'S'::text, 'Usuario no encontrado.'::text, NULL::text;
    ELSE
        RETURN QUERY SELECT 'S'::text, 'Usuario encontrado.'::text, v_acceso::text;
    END IF;
EXCEPTION WHEN OTHERS THEN
    RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

SP_OBTENER_MENUS_SUBMENUS = """
CREATE OR REPLACE FUNCTION sp_obtener_menus_submenus(p_id_usuario varchar)
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
BEGIN
    RETURN QUERY
    SELECT 'S'::text, 'Módulos encontrados.'::text,
           COALESCE(jsonb_agg(jsonb_build_object(
               'IdMenu', m.id_menu,
               'IdMenuCatalogo', m.id_menu_catalogo,
               'Menu', m.menu,
               'Icono', m.icono,
               'Ruta', m.ruta
           ) ORDER BY m.orden, m.id_menu), '[]'::jsonb)::text
    FROM menus m
    JOIN usuario_menus um ON um.id_menu = m.id_menu
    WHERE um.id_usuario = p_id_usuario;
EXCEPTION WHEN OTHERS THEN
    RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

SP_INSERTAR_USUARIO = """
CREATE OR REPLACE FUNCTION sp_insertar_usuario(p_usuario text)
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
DECLARE
    v jsonb := p_usuario::jsonb;
    v_id varchar := v->>'IdUsuario';
BEGIN
    INSERT INTO usuarios (
        id_usuario, correo_electronico, nombre_completo, id_superior,
        nombre_superior, correo_electronico_superior,
        fecha_creacion, fecha_actualizacion, estado
    ) VALUES (
        v_id, v->>'CorreoElectronico', v->>'NombreCompleto', v->>'IdSuperior',
        v->>'NombreSuperior', v->>'CorreoElectronicoSuperior',
        now(), now(), true
    );
    PERFORM fn_guardar_asignaciones(v_id, v);

    RETURN QUERY SELECT 'S'::text, 'Usuario creado correctamente.'::text,
                        fn_usuario_json(v_id)::text;
EXCEPTION
    WHEN unique_violation THEN
        RETURN QUERY SELECT 'E'::text, 'El Usuario ya se encuentra registrado.'::text, NULL::text;
    WHEN OTHERS THEN
        RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

SP_ACTUALIZAR_USUARIO = """
CREATE OR REPLACE FUNCTION sp_actualizar_usuario(p_usuario text)
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
DECLARE
    v jsonb := p_usuario::jsonb;
    v_id varchar := v->>'IdUsuario';
BEGIN
    UPDATE usuarios SET
        correo_electronico = v->>'CorreoElectronico',
        nombre_completo = v->>'NombreCompleto',
        id_superior = v->>'IdSuperior',
        nombre_superior = v->>'NombreSuperior',
        correo_electronico_superior = v->>'CorreoElectronicoSuperior',
        estado = COALESCE((v->>'Estado')::boolean, estado),
        fecha_actualizacion = now()
    WHERE id_usuario = v_id;

    IF NOT FOUND THEN
        RETURN QUERY SELECT 'W'::text, 'No se ha encontrado el registro.'::text, NULL::text;
        RETURN;
    END IF;

    PERFORM fn_guardar_asignaciones(v_id, v);

    RETURN QUERY SELECT 'S'::text, 'Usuario actualizado correctamente.'::text,
                        fn_usuario_json(v_id)::text;
EXCEPTION
    WHEN unique_violation THEN
        RETURN QUERY SELECT 'E'::text, 'El correo ya pertenece a otro usuario.'::text, NULL::text;
    WHEN OTHERS THEN
        RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

SP_ELIMINAR_USUARIO = """
CREATE OR REPLACE FUNCTION sp_eliminar_usuario(p_id_usuario varchar)
RETURNS TABLE(estatus text, mensaje text, objeto text)
LANGUAGE plpgsql AS $$
BEGIN
    UPDATE usuarios SET estado = false, fecha_actualizacion = now()
    WHERE id_usuario = p_id_usuario;

    IF NOT FOUND THEN
        RETURN QUERY SELECT 'W'::text, 'No se ha encontrado el registro.'::text, NULL::text;
        RETURN;
    END IF;

    RETURN QUERY SELECT 'S'::text, 'Usuario eliminado correctamente.'::text,
                        fn_usuario_json(p_id_usuario)::text;
EXCEPTION WHEN OTHERS THEN
    RETURN QUERY SELECT 'E'::text, SQLERRM::text, NULL::text;
END;
$$;
"""

_FUNCIONES = (
    FN_USUARIO_JSON,
    FN_GUARDAR_ASIGNACIONES,
    SP_USUARIO_COMPLETO,
    SP_OBTENER_USUARIO,
    SP_VALIDAR_USUARIO,
    SP_OBTENER_MENUS_SUBMENUS,
    SP_INSERTAR_USUARIO,
    SP_ACTUALIZAR_USUARIO,
    SP_ELIMINAR_USUARIO,
)

_DROP_FUNCIONES = (
    "sp_eliminar_usuario(varchar)",
    "sp_actualizar_usuario(text)",
    "sp_insertar_usuario(text)",
    "sp_obtener_menus_submenus(varchar)",
    "sp_validar_usuario(varchar)",
    "sp_obtener_usuario(varchar)",
    "sp_usuario_completo()",
    "fn_guardar_asignaciones(varchar, jsonb)",
    "fn_usuario_json(varchar)",
)


def upgrade() -> None:
    # ============================================================
    # 1) Usuarios + asignaciones
    # ============================================================
    op.create_table(
        "usuarios",
        sa.Column("id_usuario", sa.String(64), nullable=False),
        sa.Column("correo_electronico", sa.String(320), nullable=False),
        sa.Column("nombre_completo", sa.String(200), nullable=False),
        sa.Column("id_superior", sa.String(64), nullable=True),
        sa.Column("nombre_superior", sa.String(200), nullable=True),
        sa.Column("correo_electronico_superior", sa.String(320), nullable=True),
        sa.Column("fecha_creacion", sa.DateTime(timezone=True), nullable=False),
        sa.Column("fecha_actualizacion", sa.DateTime(timezone=True), nullable=False),
        sa.Column("estado", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id_usuario", name="pk_usuarios"),
        sa.UniqueConstraint(
            "correo_electronico", name="uq_usuarios_correo_electronico"
        ),
    )

    for tabla, columna in (("usuario_paises", "pais_id"), ("usuario_roles", "rol_id")):
        op.create_table(
            tabla,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("id_usuario", sa.String(64), nullable=False),
            sa.Column("posicion", sa.Integer(), nullable=False, server_default="0"),
            sa.Column(columna, sa.String(32), nullable=False),
            sa.Column("estado", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.PrimaryKeyConstraint("id", name=f"pk_{tabla}"),
            sa.ForeignKeyConstraint(
                ["id_usuario"],
                ["usuarios.id_usuario"],
                name=f"fk_{tabla}_id_usuario__usuarios",
                ondelete="CASCADE",
            ),
        )
        op.create_index(f"ix_{tabla}_id_usuario", tabla, ["id_usuario"])

    # ============================================================
    # 2) Menús
    # ============================================================
    op.create_table(
        "menus",
        sa.Column("id_menu", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("id_menu_catalogo", sa.String(32), nullable=True),
        sa.Column("menu", sa.String(120), nullable=False),
        sa.Column("icono", sa.String(120), nullable=False, server_default=""),
        sa.Column("ruta", sa.String(250), nullable=False, server_default=""),
        sa.Column("orden", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id_menu", name="pk_menus"),
    )
    op.create_table(
        "usuario_menus",
        sa.Column("id_usuario", sa.String(64), nullable=False),
        sa.Column("id_menu", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id_usuario", "id_menu", name="pk_usuario_menus"),
        sa.ForeignKeyConstraint(
            ["id_usuario"],
            ["usuarios.id_usuario"],
            name="fk_usuario_menus_id_usuario__usuarios",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["id_menu"],
            ["menus.id_menu"],
            name="fk_usuario_menus_id_menu__menus",
            ondelete="CASCADE",
        ),
    )

    # ============================================================
    # 3) Funciones (backend "sql")
    # ============================================================
    for ddl in _FUNCIONES:
        op.execute(ddl)


def downgrade() -> None:
    for firma in _DROP_FUNCIONES:
        op.execute(f"DROP FUNCTION IF EXISTS {firma}")
    op.drop_table("usuario_menus")
    op.drop_table("menus")
    op.drop_index("ix_usuario_roles_id_usuario", table_name="usuario_roles")
    op.drop_table("usuario_roles")
    op.drop_index("ix_usuario_paises_id_usuario", table_name="usuario_paises")
    op.drop_table("usuario_paises")
    op.drop_table("usuarios")
