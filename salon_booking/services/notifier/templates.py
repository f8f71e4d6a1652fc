"""
LINE message bodies sent after a booking is accepted.
"""

from ...core.models.booking import BookingRecord


def format_customer_confirmation(record: BookingRecord) -> str:
    """Confirmation pushed to the customer."""
    return f"""
✅ ยืนยันการจองทำผมของคุณสำเร็จ!
วันที่: {record.date}
เวลา: {record.time}
บริการ: {record.service_label() or '-'}
ช่าง: {record.technician or '-'}
ราคา: {record.price_label()} บาท
รหัสการจอง: {record.booking_ref}
ขอบคุณที่ใช้บริการครับ
    """.strip()


def format_technician_alert(record: BookingRecord) -> str:
    """Alert pushed to the booked technician."""
    return f"""
📢 มีคิวทำผมใหม่!
วันที่: {record.date}
เวลา: {record.time}
ลูกค้า: {record.customer_name or '-'}
บริการ: {record.service_label() or '-'}
ราคา: {record.price_label()} บาท
ช่าง: {record.technician or '-'}
เบอร์โทร: {record.contact_phone or '-'}
หมายเหตุ: {record.notes or '-'}
    """.strip()
