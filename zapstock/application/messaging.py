"""
WhatsApp message templates and deep links.

Links are returned to the caller to open; nothing here talks to the network.
"""

import re
from typing import Iterable, Optional
from urllib.parse import quote

from zapstock.domain.models import Customer, Product, Order

WA_ME_URL = "https://wa.me"
GROUP_SHARE_URL = "https://api.whatsapp.com/send"

# Characters encodeURIComponent leaves alone
_URI_SAFE = "!~*'()"

def clean_phone(phone: str) -> str:
    return re.sub(r"\D", "", phone)

def whatsapp_link(phone: str, text: str) -> str:
    return f"{WA_ME_URL}/{clean_phone(phone)}?text={quote(text, safe=_URI_SAFE)}"

def group_share_link(text: str) -> str:
    return f"{GROUP_SHARE_URL}?text={quote(text, safe=_URI_SAFE)}"

def format_brl(value: float) -> str:
    return f"R$ {value:.2f}"

def order_total(order: Order, product: Product) -> Optional[float]:
    if not product.price:
        return None
    return product.price * order.quantity

def contact_message(customer: Customer) -> str:
    return f"Olá {customer.name}, tudo bem? Estou entrando em contato sobre suas compras."

def payment_request(customer: Customer, product: Product, order: Order) -> str:
    total = order_total(order, product)
    total_text = f"{total:.2f}" if total is not None else "A calcular"
    return (
        f"Olá *{customer.name}*! 👋\n\n"
        f"Confirmei seu pedido de:\n📦 {product.name} (x{order.quantity})\n"
        f"💰 *Total: R$ {total_text}*\n\n"
        "Por favor, faça o pagamento e me envie o comprovante para liberarmos sua caixa! ✅"
    )

def label_request(customer: Customer) -> str:
    return (
        f"Opa {customer.name}! Pagamento confirmado ✅\n\n"
        "Agora preciso da sua *Etiqueta de Envio* (PDF) para despachar sua caixa.\n"
        "Pode me mandar por aqui?"
    )

def shipped_notice(customer: Customer) -> str:
    return f"Oi {customer.name}, ótima notícia! 🚚💨\n\nSeu pedido já foi enviado. Obrigado pela preferência!"

ORDER_MESSAGES = ("payment", "label", "shipped")

def order_message(kind: str, customer: Customer, product: Product, order: Order) -> str:
    if kind == "payment":
        return payment_request(customer, product, order)
    if kind == "label":
        return label_request(customer)
    if kind == "shipped":
        return shipped_notice(customer)
    raise ValueError(f"Unknown message kind: {kind}")

def stock_broadcast(active_products: Iterable[Product]) -> str:
    """Stock list for the sales group; sold-out lots are left out."""
    products = list(active_products)
    message = "*📦 ESTOQUE DISPONÍVEL - ATUALIZAÇÃO 📦*\n\n"
    if not products:
        return message + "_Nenhum produto disponível no momento._"
    for p in products:
        if p.remaining_quantity <= 0:
            continue
        message += f"🔹 *{p.name}*\n"
        message += f"   Restam: {p.remaining_quantity} unid\n"
        if p.price and p.price > 0:
            message += f"   💰 Valor: {format_brl(p.price)}\n"
        message += "\n"
    message += "👇 *Responda essa mensagem para reservar!*"
    return message
