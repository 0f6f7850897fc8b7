"""
Store de eventos de alteração de dados

Substitui o antigo evento global de "reset": quem depende dos dados
(ex: cache de relatórios) se inscreve aqui e é avisado após cada mutação.
"""
import enum
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List

Callback = Callable[["EventoDados", Dict[str, Any]], None]


class EventoDados(str, enum.Enum):
    """Tipos de alteração publicados pelos serviços"""
    VOTOS_ALTERADOS = "votos_alterados"
    RESULTADOS_ALTERADOS = "resultados_alterados"
    COLABORADORES_ALTERADOS = "colaboradores_alterados"
    USUARIOS_ALTERADOS = "usuarios_alterados"
    PERIODOS_ALTERADOS = "periodos_alterados"
    DADOS_RESETADOS = "dados_resetados"


class StoreEventos:
    """Publicação/assinatura em processo, segura entre threads"""

    def __init__(self):
        self._assinantes: Dict[EventoDados, List[Callback]] = defaultdict(list)
        self._lock = threading.Lock()

    def assinar(self, eventos, callback: Callback) -> Callable[[], None]:
        """
        Inscreve um callback em um ou mais tipos de evento.

        Returns:
            Função que cancela a inscrição
        """
        if isinstance(eventos, EventoDados):
            eventos = [eventos]
        eventos = list(eventos)

        with self._lock:
            for evento in eventos:
                self._assinantes[evento].append(callback)

        def cancelar():
            with self._lock:
                for evento in eventos:
                    if callback in self._assinantes[evento]:
                        self._assinantes[evento].remove(callback)

        return cancelar

    def publicar(self, evento: EventoDados, **dados: Any) -> int:
        """
        Notifica todos os assinantes do evento.

        Um assinante com erro não impede a entrega aos demais.

        Returns:
            Quantidade de assinantes notificados com sucesso
        """
        with self._lock:
            callbacks = list(self._assinantes.get(evento, []))

        entregues = 0
        for callback in callbacks:
            try:
                callback(evento, dados)
                entregues += 1
            except Exception as e:
                print(f"[EVENTOS] Erro no assinante de {evento.value}: {type(e).__name__} - {e}")
        return entregues

    def limpar(self):
        """Remove todas as inscrições"""
        with self._lock:
            self._assinantes.clear()


# Instância singleton
store_eventos = StoreEventos()
