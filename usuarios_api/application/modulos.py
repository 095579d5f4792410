"""
===============================================================================
TARJETA CRC — application/modulos.py (Aplanado de menú en dos niveles)
===============================================================================

Responsabilidades:
  - Convertir filas crudas de menú (ModuloGeneral) en el árbol de navegación
    Modulo -> submodulos, con profundidad fija de UN nivel.

Reglas:
  - Raíz: filas sin referencia a padre (id_menu_catalogo vacío / None).
  - Hijo: fila cuyo id_menu_catalogo (string) parseado a int == id_menu de
    una raíz. Referencias no numéricas nunca matchean.
  - Se conserva el orden original de raíces y el orden relativo de hijos.
  - Una raíz sin hijos queda con submodulos = None (no lista vacía).
  - Los hijos no se evalúan como padres (dos pasadas, no un árbol general).

Colaboradores:
  - domain.entities.ModuloGeneral / Modulo
  - application.usuario_service.UsuarioService
===============================================================================
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..domain.entities import Modulo, ModuloGeneral


def _parent_id(row: ModuloGeneral) -> Optional[int]:
    try:
        return int(str(row.id_menu_catalogo).strip())
    except (TypeError, ValueError):
        return None


def aplanar_modulos(rows: Iterable[ModuloGeneral] | None) -> List[Modulo]:
    """
    Aplana filas de menú en módulos con submódulos.

    Entrada vacía o None -> [].
    """
    filas = list(rows or [])
    raices = [r for r in filas if r.es_raiz]

    # 1) Agrupar hijos por id de padre (orden relativo preservado).
    hijos: Dict[int, List[Modulo]] = {}
    for row in filas:
        if row.es_raiz:
            continue
        parent = _parent_id(row)
        if parent is None:
            continue
        hijos.setdefault(parent, []).append(
            Modulo(label=row.menu, icono=row.icono, ruta=row.ruta)
        )

    # 2) Colgar hijos de cada raíz.
    return [
        Modulo(
            label=raiz.menu,
            icono=raiz.icono,
            ruta=raiz.ruta,
            submodulos=hijos.get(raiz.id_menu) or None,
        )
        for raiz in raices
    ]
