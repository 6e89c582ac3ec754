"""
Stage 2: Flattening

ЦКП: Плоский список ContainerRow (манифест x BL x контейнер).

Входные данные: List[Manifest]
Выходные данные: List[ContainerRow] в порядке вложенности источника

Нормализация:
- Размер: числовое приведение (дробное -> 0), затем целый префикс строки, иначе 0
- Номер контейнера: sentinel UNKNOWN если пусто
- Reefer флаг: всегда "0" или "1"
- IMDG: если нет ни класса, ни UN кода, но описание товара BL содержит
  DG токен -> метка "DETECTED (DGX)", UN код не выдумывается
"""

import math
import re
from typing import Any, List, Optional
from loguru import logger

from config.settings import UNKNOWN_CONTAINER
from contracts.analysis_dto import ContainerRow
from contracts.manifest_dto import Connaissement, Container, Manifest

from ..classification.dangerous_goods import DangerousGoodsClassifier, DangerousGoodsVerdict
from ..classification.rules_loader import RulesConfig
from ..domain.interfaces import IManifestFlattener


_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

# Строковые кодировки флага reefer, считающиеся "включено"
_TRUE_FLAGS = {"1", "true", "yes", "y", "oui"}


def normalize_size(value: Any) -> int:
    """
    Размер контейнера как int.

    1. Прямое числовое приведение (число или числовая строка);
       дробное значение ("40.5") - неизвестный размер
    2. Целый префикс строкового представления ("40HC" -> 40)
    3. Иначе 0 (неизвестно)
    """
    if value is None or isinstance(value, bool):
        return 0

    number = math.nan
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str) and value.strip():
            number = float(value.strip())
    except OverflowError:
        # Целое за пределами float
        return 0
    except ValueError:
        number = math.nan

    if math.isfinite(number):
        return int(number) if number.is_integer() else 0

    match = _INT_PREFIX_RE.match(str(value))
    if match:
        try:
            return int(match.group(1))
        except ValueError:
            return 0
    return 0


def normalize_reefer_flag(value: Any) -> str:
    """Флаг reefer из bool / числа / строки -> "0" или "1"."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return "1" if value == 1 else "0"
    if isinstance(value, str):
        return "1" if value.strip().lower() in _TRUE_FLAGS else "0"
    return "0"


def normalize_weight(value: Any) -> float:
    """Вес в кг, 0.0 если отсутствует, не число или вне диапазона float."""
    if isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return 0.0
    except (OverflowError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


class ManifestFlattener(IManifestFlattener):
    """
    Stage 2: разворачивание иерархии в строки.
    """

    def __init__(
        self,
        classifier: Optional[DangerousGoodsClassifier] = None,
        rules: Optional[RulesConfig] = None,
    ):
        self.rules = rules or RulesConfig.load()
        self.classifier = classifier or DangerousGoodsClassifier(rules=self.rules)

    def flatten(self, manifests: List[Manifest]) -> List[ContainerRow]:
        rows: List[ContainerRow] = []

        for m_idx, manifest in enumerate(manifests):
            waybills = manifest.connaissements or []
            if not waybills:
                logger.warning(
                    f"[ManifestFlattener] Манифест [{m_idx}] (escale: {manifest.numero_escale}) "
                    f"без connaissements"
                )

            for bl in waybills:
                if bl.conteneurs is None:
                    logger.warning(
                        f"[ManifestFlattener] BL {bl.num_bl or '?'} в манифесте [{m_idx}]: "
                        f"массив conteneurs отсутствует или некорректен"
                    )

                # Эвристика считается один раз на BL: текст общий для всех его контейнеров
                verdict = self.classifier.classify(bl.commodity)

                for container in bl.conteneurs or []:
                    rows.append(self._build_row(manifest, bl, container, verdict))

        logger.debug(f"[ManifestFlattener] {len(manifests)} манифест(ов) -> {len(rows)} строк")
        return rows

    def _build_row(
        self,
        manifest: Manifest,
        bl: Connaissement,
        container: Container,
        verdict: DangerousGoodsVerdict,
    ) -> ContainerRow:
        imdg_class = container.classe_imdg or ""
        un_code = container.code_un or ""
        imdg_detected = False

        if not imdg_class and not un_code and verdict.detected:
            imdg_class = self.rules.dg_detected_label
            imdg_detected = True

        number = container.num_conteneur
        if not number or not number.strip():
            number = UNKNOWN_CONTAINER

        return ContainerRow(
            # Манифест
            numero_escale=manifest.numero_escale or "",
            nom_navire=manifest.nom_navire or "",
            num_voyage=manifest.num_voyage or "",
            date_manifeste=manifest.date_manifeste or "",
            type_manifeste=manifest.type_manifeste or "",
            regime=manifest.regime or "",
            # BL
            num_bl=bl.num_bl or "",
            port_chargement=bl.port_chargement or "",
            client_final=bl.client_final or "",
            nif_client_final=bl.nif_client_final or "",
            marchandise=bl.commodity,
            # Контейнер
            num_conteneur=number,
            taille_conteneur=normalize_size(container.taille_conteneur),
            code_iso=container.code_iso or "",
            indicateur_groupage=container.indicateur_groupage or "0",
            categorie=container.categorie or "",
            poids=normalize_weight(container.poids),
            statut=container.statut or "",
            # Спецгрузы
            indicateur_reefer=normalize_reefer_flag(container.indicateur_reefer),
            temperature=container.temperature or "",
            classe_imdg=imdg_class,
            code_un=un_code,
            imdg_detected=imdg_detected,
        )
