from infrastructure.notifications.fcm_sender import FCMSender, build_fcm_payload

__all__ = ["FCMSender", "build_fcm_payload"]
