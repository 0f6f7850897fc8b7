"""
Serviço de Email do Destaque SHEQ
Envio via SMTP com STARTTLS (Office365, porta 587)
"""
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional, Tuple
from destaque_sheq.config import settings


class EmailService:
    """Serviço para envio de emails"""

    @property
    def is_configured(self) -> bool:
        """Verifica se o serviço de email está configurado (verifica dinamicamente)"""
        return bool(settings.SMTP_USER and settings.SMTP_PASSWORD)

    def enviar_email(
        self,
        destinatario: str,
        assunto: str,
        corpo_html: str,
        corpo_texto: Optional[str] = None
    ) -> Tuple[bool, Optional[str]]:
        """
        Envia email via SMTP

        Args:
            destinatario: Email do destinatário
            assunto: Assunto do email
            corpo_html: Corpo do email em HTML
            corpo_texto: Corpo em texto puro (opcional)

        Returns:
            Tupla (sucesso, mensagem de erro)
        """
        smtp_host = settings.SMTP_HOST
        smtp_port = settings.SMTP_PORT
        smtp_user = settings.SMTP_USER
        smtp_password = settings.SMTP_PASSWORD
        email_from = settings.EMAIL_FROM or smtp_user

        if not smtp_user or not smtp_password:
            print(f"[EMAIL] Serviço não configurado. SMTP_USER={bool(smtp_user)}, SMTP_PASSWORD={bool(smtp_password)}")
            return False, "Serviço de email não configurado"

        try:
            msg = MIMEMultipart('alternative')
            msg['From'] = email_from
            msg['To'] = destinatario
            msg['Subject'] = assunto

            if corpo_texto:
                msg.attach(MIMEText(corpo_texto, 'plain', 'utf-8'))
            msg.attach(MIMEText(corpo_html, 'html', 'utf-8'))

            # Conexão em texto puro promovida para TLS (porta 587)
            print(f"[EMAIL] Conectando a {smtp_host}:{smtp_port}...")
            with smtplib.SMTP(smtp_host, smtp_port, timeout=30) as server:
                server.starttls()

                print(f"[EMAIL] Fazendo login como {smtp_user}...")
                server.login(smtp_user, smtp_password)

                print(f"[EMAIL] Enviando de {email_from} para {destinatario}...")
                result = server.sendmail(email_from, destinatario, msg.as_string())

            if result:
                print(f"[EMAIL] Alguns destinatários falharam: {result}")
                return False, f"Destinatário recusado: {destinatario}"

            print(f"[EMAIL] Enviado com sucesso para: {destinatario}")
            return True, None

        except smtplib.SMTPAuthenticationError as e:
            print(f"[EMAIL] ERRO de autenticação: {e.smtp_code} - {e.smtp_error}")
            return False, "Falha de autenticação no servidor SMTP"
        except smtplib.SMTPRecipientsRefused as e:
            print(f"[EMAIL] Destinatário recusado: {e.recipients}")
            return False, f"Destinatário recusado: {destinatario}"
        except smtplib.SMTPException as e:
            print(f"[EMAIL] ERRO SMTP ({type(e).__name__}): {e}")
            return False, f"Erro SMTP: {e}"
        except Exception as e:
            print(f"[EMAIL] ERRO ao enviar para {destinatario}: {type(e).__name__} - {e}")
            return False, str(e)


# Instância singleton
email_service = EmailService()
