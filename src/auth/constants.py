# Auth module constants

# Error messages
INVALID_CREDENTIALS = "Tên đăng nhập hoặc mật khẩu không đúng"
USERNAME_TAKEN = "Tên đăng nhập đã tồn tại"
EMAIL_TAKEN = "Email đã được sử dụng"
ADMIN_ONLY = "Chỉ admin mới có quyền thực hiện thao tác này"

# Success messages
LOGOUT_SUCCESSFUL = "Đăng xuất thành công"
