"""
Serviço de Notificações da Votação
Monta os emails de abertura, lembrete e encerramento e envia para todos os gestores
"""
import time
from typing import Callable, List, Optional, Tuple
from sqlalchemy.orm import Session
from destaque_sheq.config import settings
from destaque_sheq.core.meses import mes_por_extenso
from destaque_sheq.models.usuario import Usuario, PapelUsuario
from destaque_sheq.models.periodo_votacao import PeriodoVotacao
from destaque_sheq.schemas.notificacao import TipoNotificacao
from destaque_sheq.services.email_service import email_service

# (destinatario, assunto, corpo_html) -> (sucesso, erro)
Remetente = Callable[[str, str, str], Tuple[bool, Optional[str]]]


class PeriodoNaoEncontradoError(LookupError):
    pass


def _enviar_via_smtp(destinatario: str, assunto: str, corpo_html: str) -> Tuple[bool, Optional[str]]:
    return email_service.enviar_email(destinatario=destinatario, assunto=assunto, corpo_html=corpo_html)


class NotificacaoService:
    """Serviço para notificar os gestores sobre a votação do mês"""

    def montar_email(self, tipo: TipoNotificacao, periodo: PeriodoVotacao) -> Tuple[str, str]:
        """
        Monta assunto e HTML do email conforme o tipo.

        Returns:
            Tupla (assunto, corpo_html)
        """
        referencia = mes_por_extenso(periodo.mes)  # Ex: "Janeiro/2024"
        data_fim = periodo.data_fim.strftime('%d/%m/%Y')
        site_url = settings.SITE_URL

        if tipo == TipoNotificacao.VOTING_START:
            assunto = f"🗳️ Votação SHEQ {referencia} - Aberta"
            cor = "#1e40af"
            cabecalho = "Destaque SHEQ - Odfjell Terminals"
            conteudo = f"""
              <h2 style="color: {cor};">Votação Aberta - {referencia}</h2>
              <p>Olá,</p>
              <p>A votação para o <strong>Destaque SHEQ de {referencia}</strong> está aberta!</p>
              <p>📅 <strong>Prazo:</strong> Até {data_fim}</p>
              <p>🎯 <strong>O que fazer:</strong></p>
              <ul>
                <li>Acesse o sistema Destaque SHEQ</li>
                <li>Vote em 1 funcionário e 1 terceirizado que se destacaram em SHEQ</li>
                <li>Responda as 8 perguntas de avaliação para cada um</li>
              </ul>
              {self._botao(site_url, "Acessar Sistema de Votação", cor)}
              <p style="color: #6b7280; font-size: 14px;">
                Sua participação é importante para reconhecer quem se destaca em Segurança, Saúde, Meio Ambiente e Qualidade.
              </p>"""

        elif tipo == TipoNotificacao.VOTING_REMINDER:
            assunto = f"⏰ Lembrete: Votação SHEQ {referencia} - Encerra em breve"
            cor = "#dc2626"
            cabecalho = "⏰ Lembrete Importante"
            conteudo = f"""
              <h2 style="color: {cor};">Votação Encerrando - {referencia}</h2>
              <p>Olá,</p>
              <p><strong>Últimos dias</strong> para votar no Destaque SHEQ de {referencia}!</p>
              <p>🚨 <strong>Encerra em:</strong> {data_fim}</p>
              <p>Ainda não votou? Acesse agora e participe!</p>
              {self._botao(site_url, "Votar Agora", cor)}"""

        else:
            assunto = f"✅ Votação SHEQ {referencia} - Encerrada"
            cor = "#059669"
            cabecalho = "Votação Encerrada"
            conteudo = f"""
              <h2 style="color: {cor};">Resultados - {referencia}</h2>
              <p>A votação do Destaque SHEQ de {referencia} foi encerrada.</p>
              <p>Em breve, os vencedores serão anunciados!</p>
              <p>Obrigado pela sua participação. 🏆</p>"""

        corpo_html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body>
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <div style="background: {cor}; color: white; padding: 20px; text-align: center;">
            <h1>{cabecalho}</h1>
        </div>
        <div style="padding: 20px; background: #f9fafb;">{conteudo}
        </div>
    </div>
</body>
</html>
"""
        return assunto, corpo_html

    def _botao(self, url: str, texto: str, cor: str) -> str:
        return f"""<div style="text-align: center; margin: 30px 0;">
                <a href="{url}"
                   style="background: {cor}; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">
                  {texto}
                </a>
              </div>"""

    def enviar_notificacao(
        self,
        db: Session,
        tipo: TipoNotificacao,
        mes: str,
        remetente: Optional[Remetente] = None,
        intervalo_segundos: Optional[float] = None
    ) -> dict:
        """
        Envia a notificação do mês para todos os gestores, um de cada vez.

        Entre um envio e o próximo há uma pausa (EMAIL_DELAY_SEGUNDOS) para
        respeitar o limite do provedor; não há pausa após o último.

        Args:
            db: Sessão do banco
            tipo: voting_start, voting_reminder ou voting_end
            mes: Mês do período (AAAA-MM)
            remetente: Função de envio (padrão: SMTP)
            intervalo_segundos: Pausa entre envios (padrão: settings)

        Returns:
            {"message": str, "results": [{email, sucesso, erro}]}

        Raises:
            PeriodoNaoEncontradoError: não existe período para o mês
        """
        remetente = remetente or _enviar_via_smtp
        if intervalo_segundos is None:
            intervalo_segundos = settings.EMAIL_DELAY_SEGUNDOS

        gestores: List[Usuario] = db.query(Usuario).filter(
            Usuario.papel == PapelUsuario.GESTOR
        ).order_by(Usuario.id).all()

        if not gestores:
            return {"message": "Nenhum gestor encontrado", "results": []}

        periodo = db.query(PeriodoVotacao).filter(PeriodoVotacao.mes == mes).first()
        if not periodo:
            raise PeriodoNaoEncontradoError(f"Período de votação não encontrado para {mes}")

        assunto, corpo_html = self.montar_email(tipo, periodo)

        resultados = []
        for i, gestor in enumerate(gestores):
            try:
                sucesso, erro = remetente(gestor.email, assunto, corpo_html)
            except Exception as e:
                sucesso, erro = False, str(e)

            resultados.append({"email": gestor.email, "sucesso": sucesso, "erro": erro})

            if i < len(gestores) - 1 and intervalo_segundos > 0:
                time.sleep(intervalo_segundos)

        enviados = sum(1 for r in resultados if r["sucesso"])
        falhas = len(resultados) - enviados
        print(f"[EMAIL] Notificação {tipo.value} de {mes}: {enviados} enviados, {falhas} falharam")

        return {
            "message": f"Notificações enviadas: {enviados} com sucesso, {falhas} com falha",
            "results": resultados,
        }


# Instância singleton
notificacao_service = NotificacaoService()
