"""
Register Identifier Unit Tests
==============================
"""

from chip8_vm.isa import Register, FLAG_REGISTER, REGISTER_COUNT


class TestRegister:
    """Test the V0-VF register identifier."""

    def test_sixteen_registers(self):
        assert REGISTER_COUNT == 16
        assert [r.index for r in Register] == list(range(16))

    def test_indexed(self):
        """indexed() maps 0-F to registers and anything else to None."""
        assert Register.indexed(0x0) is Register.V0
        assert Register.indexed(0xA) is Register.VA
        assert Register.indexed(0xF) is Register.VF
        assert Register.indexed(0x10) is None
        assert Register.indexed(-1) is None

    def test_flag_register(self):
        assert FLAG_REGISTER is Register.VF

    def test_str_is_name(self):
        assert str(Register.VA) == "VA"
        assert f"{Register.V3}" == "V3"

    def test_format_spec_formats_index(self):
        """A non-empty format spec formats the register number like an int."""
        assert f"{Register.VA:X}" == "A"
        assert f"{Register.V3:02d}" == "03"
        assert f"V{Register.VF:x}" == "Vf"
        assert f"{Register.VA}" == "VA"

    def test_indexes_bytearray(self):
        """Registers index a register file directly."""
        regs = bytearray(16)
        regs[Register.VC] = 0x42
        assert regs[12] == 0x42
