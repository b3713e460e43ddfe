"""
Templates HTML dos e-mails transacionais.
"""
from html import escape
from typing import Any, Dict

BASE_LAYOUT = """<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; background: #f4f4f4; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background: #ffffff; border-radius: 8px; padding: 30px;">
      {content}
      <p style="color: #999; font-size: 12px; margin-top: 30px;">Video Platform</p>
    </div>
  </body>
</html>"""


def _value(context: Dict[str, Any], key: str, default: str = "") -> str:
    value = context.get(key)
    return escape(str(value)) if value is not None else default


def _processing_complete(context: Dict[str, Any]) -> str:
    download_url = _value(context, "download_url")
    button = (
        f'<p><a href="{download_url}" style="background: #4CAF50; color: #fff; '
        f'padding: 12px 24px; text-decoration: none; border-radius: 4px;">Baixar frames</a></p>'
        if download_url else "<p>O link de download estará disponível na plataforma.</p>"
    )
    return f"""
      <h1 style="color: #4CAF50;">🎉 Vídeo Processado!</h1>
      <p>Olá {_value(context, "user_name", "usuário")},</p>
      <p>Seu vídeo foi processado com sucesso e os frames estão prontos para download.</p>
      <h3>Detalhes do Processamento:</h3>
      <ul>
        <li>ID do vídeo: {_value(context, "video_id")}</li>
        <li>Processado em: {_value(context, "processed_at")}</li>
      </ul>
      {button}
      <p style="color: #666;">O link expira em 1 hora.</p>"""


def _processing_failed(context: Dict[str, Any]) -> str:
    return f"""
      <h1 style="color: #f44336;">❌ Falha no Processamento</h1>
      <p>Olá {_value(context, "user_name", "usuário")},</p>
      <p>Infelizmente não conseguimos processar seu vídeo.</p>
      <h3>Detalhes do Erro:</h3>
      <ul>
        <li>ID do vídeo: {_value(context, "video_id")}</li>
        <li>Erro: {_value(context, "error", "Erro desconhecido")}</li>
        <li>Falhou em: {_value(context, "failed_at")}</li>
      </ul>
      <h3>🔧 Próximos Passos:</h3>
      <ul>
        <li>Verifique se o arquivo está em um formato suportado (MP4, AVI, MOV, MKV)</li>
        <li>Tente enviar o vídeo novamente</li>
        <li>Se o problema persistir, <a href="{_value(context, "support_url")}">fale com o suporte</a></li>
      </ul>"""


def _default(context: Dict[str, Any]) -> str:
    return f"""
      <h1>{_value(context, "title", "Notificação")}</h1>
      <p>{_value(context, "message")}</p>"""


TEMPLATES = {
    "video-processing-complete": _processing_complete,
    "video-processing-failed": _processing_failed,
    "default": _default,
}


def render_email(template: str, context: Dict[str, Any]) -> str:
    """
    Renderiza o template (ou o default, se desconhecido).

    Args:
        template: Nome do template
        context: Variáveis do template

    Returns:
        str: HTML completo
    """
    renderer = TEMPLATES.get(template, _default)
    return BASE_LAYOUT.format(content=renderer(context))
