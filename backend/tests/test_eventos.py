"""
Testes do store de eventos de alteração de dados.
"""

import pytest

from destaque_sheq.core.eventos import StoreEventos, EventoDados


class TestStoreEventos:
    """Publicação e assinatura de eventos."""

    @pytest.fixture
    def store(self):
        """Store isolado (não interfere no cache de relatórios)."""
        return StoreEventos()

    def test_publicar_para_assinantes(self, store):
        recebidos = []
        store.assinar(EventoDados.VOTOS_ALTERADOS, lambda evento, dados: recebidos.append((evento, dados)))

        entregues = store.publicar(EventoDados.VOTOS_ALTERADOS, mes="2024-01")

        assert entregues == 1
        assert recebidos == [(EventoDados.VOTOS_ALTERADOS, {"mes": "2024-01"})]

    def test_evento_sem_assinantes(self, store):
        assert store.publicar(EventoDados.DADOS_RESETADOS) == 0

    def test_cancelar_inscricao(self, store):
        """Cancelar remove o callback de todos os eventos assinados."""
        recebidos = []
        cancelar = store.assinar(
            [EventoDados.VOTOS_ALTERADOS, EventoDados.RESULTADOS_ALTERADOS],
            lambda evento, dados: recebidos.append(evento),
        )

        store.publicar(EventoDados.RESULTADOS_ALTERADOS)
        cancelar()
        store.publicar(EventoDados.VOTOS_ALTERADOS)

        assert recebidos == [EventoDados.RESULTADOS_ALTERADOS]

    def test_assinante_com_erro_nao_bloqueia_os_demais(self, store):
        recebidos = []

        def quebrado(evento, dados):
            raise RuntimeError("falhou")

        store.assinar(EventoDados.COLABORADORES_ALTERADOS, quebrado)
        store.assinar(EventoDados.COLABORADORES_ALTERADOS, lambda evento, dados: recebidos.append(dados))

        entregues = store.publicar(EventoDados.COLABORADORES_ALTERADOS, colaborador_id=1)

        assert entregues == 1
        assert recebidos == [{"colaborador_id": 1}]

    def test_limpar(self, store):
        store.assinar(EventoDados.USUARIOS_ALTERADOS, lambda evento, dados: None)

        store.limpar()

        assert store.publicar(EventoDados.USUARIOS_ALTERADOS) == 0
