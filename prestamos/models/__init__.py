# Automatically load all models so metadata knows them
from prestamos.models.user_model import User
from prestamos.models.cobrador_model import Cobrador
from prestamos.models.cliente_model import Cliente
from prestamos.models.prestamo_model import Prestamo
from prestamos.models.pago_model import Pago
from prestamos.models.nota_model import NotaPrestamo
from prestamos.models.movimiento_caja_model import MovimientoCaja
from prestamos.models.configuracion_model import Configuracion
