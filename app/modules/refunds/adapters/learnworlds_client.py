# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/adapters/learnworlds_client.py

Cliente de la API admin de LearnWorlds (plataforma de aprendizaje).

Operaciones:
- get_course_progress: porcentaje agregado de avance (0-100) de un curso.
- fetch_course_sections: avance por sección/unidad de un curso.
- fetch_user_course_section_progress_map: precarga en bloque del avance
  por sección de varios cursos (bundles), paginando /users/{email}/progress.
- check_course_section_limit: ¿el alumno avanzó más allá de la sección límite?
- unenroll: revoca el acceso a un curso/bundle.

Las lecturas NUNCA lanzan excepciones hacia el evaluador: devuelven
resultados con success=False para que el llamador decida (fail-open).

Autor: Ixchel Beristain
Fecha: 2026-10-08
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, TYPE_CHECKING
from urllib.parse import quote

import httpx

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

API_PREFIX = "/admin/api/v2"


# ============================================================================
# RESULTADOS
# ============================================================================

@dataclass(frozen=True)
class UnitProgress:
    unit_id: Optional[str]
    progress_rate: float


@dataclass(frozen=True)
class SectionProgress:
    """Avance de una sección; section_index empieza en 1."""
    section_index: int
    section_id: Optional[str]
    section_name: Optional[str]
    units: tuple[UnitProgress, ...] = ()

    def has_progress_above(self, rate_limit: float) -> bool:
        return any(unit.progress_rate > rate_limit for unit in self.units)


@dataclass(frozen=True)
class ViolatingSection:
    section_index: int
    section_name: Optional[str] = None

    def describe(self) -> str:
        base = f"section {self.section_index}"
        return f"{base} ({self.section_name})" if self.section_name else base


@dataclass
class ProgressResult:
    success: bool
    progress: Optional[float] = None
    error: Optional[str] = None


@dataclass
class SectionsResult:
    success: bool
    sections: List[SectionProgress] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class SectionLimitResult:
    success: bool
    exceeded_limit: bool = False
    violating_section: Optional[ViolatingSection] = None
    error: Optional[str] = None


@dataclass
class UnenrollResult:
    success: bool
    error: Optional[str] = None


class IProgressLookup(Protocol):
    """Contrato consumido por el evaluador y el ejecutor."""

    async def get_course_progress(self, email: str, course_enroll_id: str) -> ProgressResult: ...

    async def fetch_user_course_section_progress_map(
        self, email: str, course_ids: Iterable[str]
    ) -> Dict[str, List[SectionProgress]]: ...

    async def check_course_section_limit(
        self,
        email: str,
        course_enroll_id: str,
        *,
        section_limit: int,
        unit_progress_rate_limit: float,
        sections_override: Optional[Sequence[SectionProgress]] = None,
    ) -> SectionLimitResult: ...

    async def unenroll(self, email: str, enroll_id: str, product_type_hint: str) -> UnenrollResult: ...


# ============================================================================
# PARSEO
# ============================================================================

def _as_rate(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_sections(payload: Dict[str, Any]) -> List[SectionProgress]:
    """
    Convierte `progress_per_section_unit` en una lista ordenada de secciones.

    Formato esperado:
        {"progress_per_section_unit": [
            {"section_id": "...", "section_name": "...",
             "units": [{"unit_id": "...", "unit_progress_rate": 40}, ...]},
            ...
        ]}
    """
    raw_sections = payload.get("progress_per_section_unit") or []
    sections: List[SectionProgress] = []
    for index, raw in enumerate(raw_sections, start=1):
        if not isinstance(raw, dict):
            continue
        units = tuple(
            UnitProgress(
                unit_id=unit.get("unit_id"),
                progress_rate=_as_rate(unit.get("unit_progress_rate", unit.get("progress_rate"))),
            )
            for unit in (raw.get("units") or [])
            if isinstance(unit, dict)
        )
        sections.append(
            SectionProgress(
                section_index=index,
                section_id=raw.get("section_id"),
                section_name=raw.get("section_name") or None,
                units=units,
            )
        )
    return sections


def furthest_section_with_progress(
    sections: Sequence[SectionProgress],
    unit_progress_rate_limit: float,
) -> Optional[SectionProgress]:
    """Sección de mayor índice con alguna unidad por encima del umbral."""
    candidates = [s for s in sections if s.has_progress_above(unit_progress_rate_limit)]
    if not candidates:
        return None
    return max(candidates, key=lambda s: s.section_index)


# ============================================================================
# CLIENTE
# ============================================================================

class LearnWorldsClient:
    """Cliente async (httpx) para la API admin v2 de LearnWorlds."""

    def __init__(
        self,
        *,
        base_url: str,
        api_token: str,
        client_id: str,
        http_client: httpx.AsyncClient,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._client_id = client_id
        self._http = http_client
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: BaseAppSettings, http_client: httpx.AsyncClient) -> "LearnWorldsClient":
        token = settings.learnworlds_api_token.get_secret_value() if settings.learnworlds_api_token else ""
        if not token or not settings.learnworlds_client_id:
            logger.warning("[LearnWorlds] LEARNWORLDS_API_TOKEN / LEARNWORLDS_CLIENT_ID no configurados")
        return cls(
            base_url=settings.learnworlds_base_url,
            api_token=token,
            client_id=settings.learnworlds_client_id or "",
            http_client=http_client,
            timeout=settings.learnworlds_timeout_sec,
        )

    # -------------------------------------------------------------
    # Helpers HTTP
    # -------------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Lw-Client": self._client_id,
            "Accept": "application/json",
        }

    def _user_url(self, email: str, suffix: str) -> str:
        return f"{self.base_url}{API_PREFIX}/users/{quote(email, safe='')}{suffix}"

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET que devuelve el cuerpo JSON; lanza httpx.HTTPError / ValueError."""
        response = await self._http.get(url, headers=self._headers(), params=params, timeout=self._timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Respuesta JSON inesperada")
        return data

    # -------------------------------------------------------------
    # Progreso agregado
    # -------------------------------------------------------------
    async def get_course_progress(self, email: str, course_enroll_id: str) -> ProgressResult:
        url = self._user_url(email, f"/courses/{quote(course_enroll_id, safe='')}/progress")
        try:
            data = await self._get_json(url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[LearnWorlds] progress fetch failed course=%s: %s", course_enroll_id, e)
            return ProgressResult(success=False, error="Failed to fetch progress")

        return ProgressResult(success=True, progress=_as_rate(data.get("progress_rate")))

    # -------------------------------------------------------------
    # Progreso por sección
    # -------------------------------------------------------------
    async def fetch_course_sections(self, email: str, course_enroll_id: str) -> SectionsResult:
        url = self._user_url(email, f"/courses/{quote(course_enroll_id, safe='')}/progress")
        try:
            data = await self._get_json(url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[LearnWorlds] sections fetch failed course=%s: %s", course_enroll_id, e)
            return SectionsResult(success=False, error=f"Failed to fetch section progress: {e}")

        return SectionsResult(success=True, sections=parse_sections(data))

    async def fetch_user_course_section_progress_map(
        self,
        email: str,
        course_ids: Iterable[str],
    ) -> Dict[str, List[SectionProgress]]:
        """
        Precarga el avance por sección de varios cursos en una sola pasada
        paginada. Cualquier falla devuelve {} y el llamador consulta curso
        por curso.
        """
        wanted = {cid for cid in course_ids if cid}
        if not wanted:
            return {}

        url = self._user_url(email, "/progress")
        result: Dict[str, List[SectionProgress]] = {}
        page = 1
        total_pages = 1
        try:
            while page <= total_pages:
                data = await self._get_json(url, params={"page": page})
                for entry in data.get("data") or []:
                    if not isinstance(entry, dict):
                        continue
                    course_id = entry.get("course_id")
                    if course_id in wanted:
                        result[course_id] = parse_sections(entry)
                meta = data.get("meta") or {}
                total_pages = int(meta.get("totalPages") or 1)
                page += 1
        except (httpx.HTTPError, ValueError, TypeError) as e:
            logger.warning("[LearnWorlds] bulk progress fetch failed: %s", e)
            return {}

        return result

    async def check_course_section_limit(
        self,
        email: str,
        course_enroll_id: str,
        *,
        section_limit: int,
        unit_progress_rate_limit: float,
        sections_override: Optional[Sequence[SectionProgress]] = None,
    ) -> SectionLimitResult:
        """
        Determina si la sección más avanzada con progreso significativo
        (alguna unidad con avance > unit_progress_rate_limit) supera section_limit.
        """
        if sections_override is not None:
            sections: Sequence[SectionProgress] = sections_override
        else:
            fetched = await self.fetch_course_sections(email, course_enroll_id)
            if not fetched.success:
                return SectionLimitResult(success=False, error=fetched.error)
            sections = fetched.sections

        furthest = furthest_section_with_progress(sections, unit_progress_rate_limit)
        if furthest is None or furthest.section_index <= section_limit:
            return SectionLimitResult(success=True, exceeded_limit=False)

        return SectionLimitResult(
            success=True,
            exceeded_limit=True,
            violating_section=ViolatingSection(
                section_index=furthest.section_index,
                section_name=furthest.section_name,
            ),
        )

    # -------------------------------------------------------------
    # Revocación de acceso
    # -------------------------------------------------------------
    async def unenroll(self, email: str, enroll_id: str, product_type_hint: str) -> UnenrollResult:
        url = self._user_url(email, "/enrollment")
        headers = {**self._headers(), "Content-Type": "application/json"}
        try:
            response = await self._http.request(
                "DELETE",
                url,
                headers=headers,
                json={"productId": enroll_id, "productType": product_type_hint},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            logger.error("[LearnWorlds] unenroll request failed enroll_id=%s: %s", enroll_id, e)
            return UnenrollResult(success=False, error="Error unenrolling")

        # LearnWorlds responde 204 No Content en éxito
        if response.status_code == 204 or response.is_success:
            return UnenrollResult(success=True)

        logger.error("[LearnWorlds] unenroll failed enroll_id=%s status=%s", enroll_id, response.status_code)
        return UnenrollResult(success=False, error=f"HTTP {response.status_code}")


__all__ = [
    "UnitProgress",
    "SectionProgress",
    "ViolatingSection",
    "ProgressResult",
    "SectionsResult",
    "SectionLimitResult",
    "UnenrollResult",
    "IProgressLookup",
    "parse_sections",
    "furthest_section_with_progress",
    "LearnWorldsClient",
]

# Fin del archivo backend/app/modules/refunds/adapters/learnworlds_client.py
